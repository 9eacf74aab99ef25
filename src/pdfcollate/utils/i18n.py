"""
PdfCollate - Translations

Binds the "pdfcollate" gettext domain. Messages are returned untranslated
when no catalog is installed for the current locale.
"""

import gettext
import os
import sys

DOMAIN = "pdfcollate"


def _find_localedir() -> str | None:
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    candidates = (
        os.path.join(package_dir, "locale"),
        os.path.join(sys.prefix, "share", "locale"),
        "/usr/share/locale",
    )
    for candidate in candidates:
        if gettext.find(DOMAIN, candidate):
            return candidate
    return None


translation = gettext.translation(DOMAIN, localedir=_find_localedir(), fallback=True)
_ = translation.gettext
