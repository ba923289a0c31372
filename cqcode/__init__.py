"""cqcode — CQ code inline markup for chat messages.

- Escaping: plain text and inside-code escaping, unescape
- CQCode: ordered type + fields entity, serialization
- Parser: scan chat text for well-formed codes
- Builders: image/video/share/at/reply/record helpers
- Prefetch: download images to a local cache before sending
"""

__version__ = "0.3.0"

from .escape import escape, escape_inside_code, unescape
from .code import CQCode
from .parser import parse_all, iter_codes, strip_codes
from .builders import image, image_base64, video, share, at, at_all, reply, record
from .prefetch import MediaPrefetcher, prefetch_image, get_prefetcher, set_prefetcher

__all__ = [
    "__version__",
    # Escaping
    "escape",
    "escape_inside_code",
    "unescape",
    # Entity / parsing
    "CQCode",
    "parse_all",
    "iter_codes",
    "strip_codes",
    # Builders
    "image",
    "image_base64",
    "video",
    "share",
    "at",
    "at_all",
    "reply",
    "record",
    # Prefetch
    "MediaPrefetcher",
    "prefetch_image",
    "get_prefetcher",
    "set_prefetcher",
]
