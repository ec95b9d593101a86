"""
Slug derivation for post URLs.

    derive_slug("My Awesome Post Title")  ->  "my-awesome-post-title"
    derive_slug("  Crème brûlée, 2nd try! ")  ->  "creme-brulee-2nd-try"
"""

import re
import unicodedata

# Width of posts.slug
MAX_SLUG_LENGTH = 255

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def derive_slug(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Turn a title into a URL-safe slug.

    Accented characters are folded to ASCII, the result is lowercased, every
    run of non-alphanumeric characters becomes a single hyphen and hyphens at
    either end are trimmed. Folding can lengthen the text ("㎒" becomes
    "mhz"), so the result is cut to max_length before the final trim.
    Returns an empty string when nothing survives.
    """
    ascii_title = (
        unicodedata.normalize("NFKD", title)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    slug = _NON_ALNUM_RUN.sub("-", ascii_title.lower()).strip("-")
    return slug[:max_length].rstrip("-")
