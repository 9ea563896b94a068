"""Sample document root shared by unit and integration tests."""

from pathlib import Path

TEMPLATE_PAGE = (
    "<html><body>\n"
    "<p>Today is <cs371date>.</p>\n"
    "<p>Served by <cs371server> on <cs371date></p>\n"
    "<p>No tokens here</p>\r\n"
    "last line without newline"
)
BINARY_PAYLOAD = bytes(range(256)) * 16


def populate_document_root(directory: Path) -> Path:
    """Write the sample resources every server test serves."""

    (directory / "index.html").write_bytes(TEMPLATE_PAGE.encode())
    (directory / "plain.html").write_bytes(b"<p>plain</p>\n")
    for name in ("image.gif", "image.png", "IMAGE.PNG", "photo.jpg", "photo.jpeg"):
        (directory / name).write_bytes(BINARY_PAYLOAD)
    (directory / "PHOTO.JPEG").write_bytes(BINARY_PAYLOAD[::-1])
    (directory / "notes.txt").write_bytes(b"not served\n")
    return directory
