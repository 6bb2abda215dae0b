"""Click to mark points on an image, with modifier + scroll zoom."""

import image_marker.utils.i18n  # noqa: F401
