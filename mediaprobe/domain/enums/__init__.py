from mediaprobe.domain.enums.media_kind import MediaKind
from mediaprobe.domain.enums.person_role import PersonRole
__all__ = [
    "MediaKind",
    "PersonRole",
]
