import pytest

from ballot_parsers.config import build_config, load_config

JURISDICTIONS = {
    "0": "Unincorporated",
    "1": "Salinas",
    "2": "Monterey",
    "3": "Seaside",
    "4": "Marina",
}

CANVASS_CORRECTIONS = [
    ["30512", "Vote by Mail", "1,204", "388", "32.23 %", "201", "180", "197", "184"],
]

APPLICATION_CORRECTIONS = [
    [
        "13.",
        "8-San Bernardino County Transportation Authority (SBCTA)-1",
        "San Bernardino County Transportation Authority (SBCTA)",
        "San Bernardino County Safe Routes to Schools Phase III Program",
        "6/6/2022",
    ],
]


class FakePage:
    """Stands in for a pdfplumber Page: rows of words laid out top to bottom."""

    def __init__(self, rows, line_height=12.0):
        self.words = []
        for i, row in enumerate(rows):
            for j, text in enumerate(row):
                self.words.append({"text": text, "x0": 40.0 + 60 * j, "top": 50.0 + line_height * i})
        self.flushed = False

    def extract_words(self, **kwargs):
        return list(self.words)

    def flush_cache(self):
        self.flushed = True


class FakePDF:
    def __init__(self, pages, metadata=None):
        self.pages = pages
        self.metadata = metadata or {"Title": "Statement of Votes Cast"}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def config():
    return build_config(JURISDICTIONS, CANVASS_CORRECTIONS, APPLICATION_CORRECTIONS)


@pytest.fixture
def packaged_config():
    return load_config()


@pytest.fixture
def make_pdf():
    """Build a fake PDF from a list of pages, each a list of rows of words."""
    def _make(*pages, metadata=None):
        return FakePDF([FakePage(rows) for rows in pages], metadata)
    return _make


# Left edge (pt) of each canvass column when drawing a real PDF
COLUMNS = (40, 90, 170, 220, 260, 320, 360, 400, 440)


@pytest.fixture
def draw_pdf(tmp_path):
    """Draw pages of rows to a real PDF with reportlab and return its path.

    Each cell is drawn as its own string at the column's x position, so the
    text keeps whatever padding the cell carries.
    """
    from reportlab.pdfgen import canvas

    def _draw(*pages, name="canvass.pdf"):
        path = tmp_path / name
        c = canvas.Canvas(str(path))
        c.setTitle("Statement of Votes Cast")
        for rows in pages:
            c.setFont("Helvetica", 9)
            for i, row in enumerate(rows):
                y = 760 - 18 * i
                for x, text in zip(COLUMNS, row):
                    c.drawString(x, y, text)
            c.showPage()
        c.save()
        return path
    return _draw
