"""External data sources: git, GitHub PRs, quotes, session records."""

from chud.sources.git import get_git_info, get_git_root
from chud.sources.pr import PrInfo, get_pr_info
from chud.sources.quotes import QuoteSource
from chud.sources.sessions import SessionRootStore

__all__ = [
    "PrInfo",
    "QuoteSource",
    "SessionRootStore",
    "get_git_info",
    "get_git_root",
    "get_pr_info",
]
