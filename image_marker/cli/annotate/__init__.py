# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Interactively place color markers on an image")


def command(subparser):
    subparser.add_argument(
        "image",
        type=Path,
        nargs="?",
        help=_("Image to open, a file dialog can load one later"),
    )
    subparser.add_argument(
        "-c",
        "--color",
        dest="color",
        default="red",
        choices=["red", "blue", "green", "yellow", "black"],
        help=_("Initial marker color"),
    )

    def handle(args):
        from .annotator import handle as annotator_handle

        annotator_handle(args)

    return handle
