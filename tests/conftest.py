import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(repo_root))

APP_CSS = b"body {\n    color: red;\n}\n\n/* footer */\n.footer { margin : 0 auto ; }\n"
APP_JS = b"function add(a, b) {\n    // add two numbers\n    return a + b;\n}\n"
LOGO_PNG = b"\x89PNG\r\n\x1a\n" + bytes(range(256))
README_TXT = b"  keep    this   spacing  \n\n"


@pytest.fixture()
def site_root(tmp_path):
    """A small static site laid out beneath a temporary directory."""
    root = tmp_path / "site"
    files = {
        "css/app.css": APP_CSS,
        "js/app.js": APP_JS,
        "images/logo.png": LOGO_PNG,
        "docs/readme.txt": README_TXT,
        "etc/passwd": b"inside the site\n",
    }
    for rel, data in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    return root
