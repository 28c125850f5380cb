import pytest


ARKIME_URL = "https://arkime.example/sessions?date=-1&startTime=1000&stopTime=2000&expression=ip.dst%3D%3D10.0.0.5"
KIBANA_URL = (
    "https://kibana.example/app/discover#?_g=(time:(from:'2023-01-01T00:00:00.000Z',"
    "to:'2023-01-02T00:00:00.000Z'))&_a=(columns:!(_source))"
)
PLAIN_URL = "https://wiki.example/runbooks/beaconing"


@pytest.fixture
def arkime_url():
    return ARKIME_URL


@pytest.fixture
def kibana_url():
    return KIBANA_URL


@pytest.fixture
def bookmarks_html():
    """A small bookmarks export with Hunt and Test headings."""
    return f"""<!DOCTYPE NETSCAPE-Bookmark-file-1>
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT>Hunt1 Beaconing <A HREF="{ARKIME_URL}" ADD_DATE="1700000000">Beacon sessions</A>
    <DT>Hunt2 Notes <A HREF="{PLAIN_URL}" ADD_DATE="1700000000">Runbook</A>
    <DT>Hunt3 Summary <A HREF="{ARKIME_URL}" ADD_DATE="1700000000">Session</A>
    <DT>Test1 Discover <A HREF="{KIBANA_URL}" ADD_DATE="1700000000">Discover</A>
    <DT>Reference <A HREF="https://example.com/" ADD_DATE="1700000000">Example</A>
</DL><p>
"""


@pytest.fixture
def bookmarks_file(tmp_path, bookmarks_html):
    """The sample export written to disk."""
    path = tmp_path / "bookmarks.html"
    path.write_text(bookmarks_html, encoding="utf-8")
    return path


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with an empty HOME and working directory and no BTU_ variables."""
    import os
    import btu.config

    work = tmp_path / "work"
    work.mkdir()
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ.keys()):
        if key.startswith("BTU_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(btu.config, "_config", None)
    return work
