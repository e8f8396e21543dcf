"""Title clean-up shared by every naming convention."""

import re
from typing import Optional, Sequence, Tuple

# Articles are tried in this order, but the one found earliest in the title wins.
ARTICLES = (
    "Eine", "The", "Der", "Die", "Das", "Ein", "Les", "Los", "Las",
    "An", "De", "La", "Le", "El", "A",
)

_ARTICLE_PATTERNS = tuple(
    (article, re.compile(rf", {article}($|\s)")) for article in ARTICLES
)


def _find_article(title: str, patterns) -> Optional[Tuple[str, int]]:
    found = None
    for article, pattern in patterns:
        match = pattern.search(title)
        if match and (found is None or match.start() < found[1]):
            found = (article, match.start())
    return found


def move_articles(title: str, articles: Sequence[str] = ARTICLES) -> str:
    """
    Move a trailing article to the front of the title.

    ``"Legend of Zelda, The - A Link to the Past"`` becomes
    ``"The Legend of Zelda - A Link to the Past"``. Only the article found
    earliest in the title is moved.
    """
    if articles is ARTICLES:
        patterns = _ARTICLE_PATTERNS
    else:
        patterns = tuple((a, re.compile(rf", {re.escape(a)}($|\s)")) for a in articles)

    found = _find_article(title, patterns)
    if found is None:
        return title
    article, index = found
    end = index + len(f", {article}")
    return f"{article} {title[:index]}{title[end:]}"


def replace_hyphens(title: str) -> str:
    """Replace every `` - `` subtitle separator with ``: ``."""
    return title.replace(" - ", ": ")


def release_title(entry_title: str) -> str:
    """The display title of a release: articles moved, subtitles separated by colons."""
    return replace_hyphens(move_articles(entry_title))
