"""Filter expressions for file listing queries.

Filter tags sent by clients are mapped to MIME type predicates built
from ``Q`` objects, then combined with the ownership predicate:

    user_id = U AND (tag_1 OR tag_2 ...) AND filename ILIKE %fragment%

An unknown tag becomes a predicate that matches nothing, so a request
with only unknown tags returns an empty page instead of failing.
"""

from collections.abc import Iterable
from typing import Final

from django.db.models import Q

IMAGES: Final = 'images'
VIDEOS: Final = 'videos'
PDF: Final = 'pdf'
OTHER: Final = 'other'

_IMAGE_PREFIX: Final = 'image/'
_VIDEO_PREFIX: Final = 'video/'
_PDF_MIME_TYPE: Final = 'application/pdf'

# `pk__in=[]` compiles to an empty result, Django drops it inside an OR
_MATCH_NOTHING: Final = Q(pk__in=[])

# MIME types are case-insensitive (RFC 2045) on every backend
_IS_IMAGE: Final = Q(mime_type__istartswith=_IMAGE_PREFIX)
_IS_VIDEO: Final = Q(mime_type__istartswith=_VIDEO_PREFIX)
_IS_PDF: Final = Q(mime_type__iexact=_PDF_MIME_TYPE)

_TYPE_FILTERS: Final[dict[str, Q]] = {
    IMAGES: _IS_IMAGE,
    VIDEOS: _IS_VIDEO,
    PDF: _IS_PDF,
    OTHER: ~_IS_IMAGE & ~_IS_VIDEO & ~_IS_PDF,
}

FILE_TYPES: Final = frozenset(_TYPE_FILTERS)


def type_filter(file_type: str) -> Q:
    """Get the MIME type predicate for a single filter tag.

    Args:
        file_type: Filter tag (``images``, ``videos``, ``pdf``, ``other``).

    Returns:
        Predicate for the tag, or a predicate matching nothing for
        an unknown tag.
    """
    return _TYPE_FILTERS.get(file_type, _MATCH_NOTHING)


def build_file_filter(
    user_id: str,
    selected_file_types: Iterable[str] = (),
    file_name: str | None = None,
) -> Q:
    """Build the WHERE clause for a file listing.

    Args:
        user_id: Owner of the files.
        selected_file_types: Filter tags, combined with OR.
            Empty means no type restriction.
        file_name: Optional case-insensitive filename fragment.
            Blank values are ignored.

    Returns:
        Combined predicate for ``File`` queries.
    """
    where = Q(user_id=user_id)

    type_conditions = [type_filter(tag) for tag in selected_file_types]
    if type_conditions:
        any_type = Q()
        for condition in type_conditions:
            any_type |= condition
        where &= any_type

    if file_name and file_name.strip():
        where &= Q(filename__icontains=file_name)

    return where
