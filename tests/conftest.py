"""Pytest fixtures for wkpdf tests.

The renderer and display wrapper are replaced by small Python scripts
written into tmp_path. The stub renderer understands just enough of the
wkhtmltopdf command line to be useful: it loads every `*.html` path, URL and
`-` source, records each invocation as a JSON line, and writes a real PDF
with one page per source to stdout.
"""

import json
import sys
from pathlib import Path

import pytest

from schemas.config import RendererConfig

SIMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Simple</title>
</head>
<body>
    <h1>Test Page</h1>
    <p>Path: /simple</p>
</body>
</html>"""

RENDERER_SCRIPT = '''
import json
import os
import sys
from pathlib import Path

import pymupdf

LOG = Path(__LOG__)
NEEDS_DISPLAY = __NEEDS_DISPLAY__

args = sys.argv[1:]
stdin = sys.stdin.buffer.read()

files = {}
for arg in args:
    if arg.endswith(".html") and Path(arg).exists():
        files[arg] = Path(arg).read_text()

with LOG.open("a") as f:
    f.write(json.dumps({
        "argv": args,
        "stdin": stdin.decode("utf-8"),
        "files": files,
        "display": bool(os.environ.get("STUB_DISPLAY")),
    }) + "\\n")

if NEEDS_DISPLAY and not os.environ.get("STUB_DISPLAY"):
    sys.stderr.write("QXcbConnection: Could not connect to display\\n")
    sys.exit(1)

if not args or args[-1] != "-":
    sys.stderr.write("Error: no output file given\\n")
    sys.exit(1)

sources = []
for arg in args[:-1]:
    if arg == "-":
        if not stdin:
            sys.stderr.write("Error: stdin is empty\\n")
            sys.exit(1)
        sources.append("stdin")
    elif arg.startswith(("http://", "https://", "file://")):
        sources.append(arg)
    elif arg.endswith(".html"):
        if arg not in files:
            sys.stderr.write(
                f"Error: Failed loading page file://{Path(arg).resolve()}\\n"
            )
            sys.exit(1)
        sources.append(arg)

doc = pymupdf.open()
for source in sources:
    page = doc.new_page()
    page.insert_text((72, 72), source)
sys.stdout.buffer.write(doc.tobytes())
'''

PASSTHROUGH_WRAPPER_SCRIPT = '''
import json
import os
import subprocess
import sys
from pathlib import Path

LOG = Path(__LOG__)

args = sys.argv[1:]
with LOG.open("a") as f:
    f.write(json.dumps({"argv": args}) + "\\n")

while args and args[0].startswith("-"):
    args.pop(0)

stdin = sys.stdin.buffer.read()
env = dict(os.environ, STUB_DISPLAY="1")
result = subprocess.run(args, input=stdin, env=env)
sys.exit(result.returncode)
'''

STANDALONE_WRAPPER_SCRIPT = '''
import json
import sys
from pathlib import Path

import pymupdf

LOG = Path(__LOG__)

with LOG.open("a") as f:
    f.write(json.dumps({"argv": sys.argv[1:], "stdin": sys.stdin.read()}) + "\\n")

doc = pymupdf.open()
doc.new_page().insert_text((72, 72), "wrapped")
sys.stdout.buffer.write(doc.tobytes())
'''

HANGING_SCRIPT = '''
import time

time.sleep(30)
'''


def write_script(path: Path, body: str, **placeholders) -> Path:
    """Write an executable Python script that runs under this interpreter."""
    for key, value in placeholders.items():
        body = body.replace(f"__{key.upper()}__", repr(value))
    path.write_text(f"#!{sys.executable}\n{body}")
    path.chmod(0o755)
    return path


def read_calls(log_path: Path) -> list[dict]:
    """Return the invocations recorded by a stub executable."""
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text().splitlines()]


@pytest.fixture
def stub_bin(tmp_path):
    """Directory holding stub executables."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return bin_dir


@pytest.fixture
def renderer_log(tmp_path):
    return tmp_path / "renderer-calls.jsonl"


@pytest.fixture
def wrapper_log(tmp_path):
    return tmp_path / "wrapper-calls.jsonl"


@pytest.fixture
def stub_renderer(stub_bin, renderer_log):
    """Stub renderer that works without a display."""
    return write_script(
        stub_bin / "wkhtmltopdf",
        RENDERER_SCRIPT,
        log=str(renderer_log),
        needs_display=False,
    )


@pytest.fixture
def headless_renderer(stub_bin, renderer_log):
    """Stub renderer that fails unless started by the display wrapper."""
    return write_script(
        stub_bin / "wkhtmltopdf-qt",
        RENDERER_SCRIPT,
        log=str(renderer_log),
        needs_display=True,
    )


@pytest.fixture
def passthrough_wrapper(stub_bin, wrapper_log):
    """Stub display wrapper that runs its arguments with a display set."""
    return write_script(
        stub_bin / "xvfb-run",
        PASSTHROUGH_WRAPPER_SCRIPT,
        log=str(wrapper_log),
    )


@pytest.fixture
def standalone_wrapper(stub_bin, wrapper_log):
    """Stub display wrapper that produces a PDF without running the renderer."""
    return write_script(
        stub_bin / "xvfb-standalone",
        STANDALONE_WRAPPER_SCRIPT,
        log=str(wrapper_log),
    )


@pytest.fixture
def hanging_renderer(stub_bin):
    """Stub renderer that never finishes."""
    return write_script(stub_bin / "wkhtmltopdf-hang", HANGING_SCRIPT)


@pytest.fixture
def scratch_dir(tmp_path):
    """Base directory for temporary page files."""
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return scratch


@pytest.fixture
def stub_config(stub_renderer, passthrough_wrapper, scratch_dir):
    """RendererConfig pointing at the stub executables."""
    return RendererConfig(
        renderer=str(stub_renderer),
        display_wrapper=str(passthrough_wrapper),
        temp_dir=scratch_dir,
    )


@pytest.fixture
def simple_html(tmp_path):
    """A simple HTML page on disk."""
    html_path = tmp_path / "simple.html"
    html_path.write_text(SIMPLE_HTML)
    return html_path


@pytest.fixture
def renderer_calls(renderer_log):
    """Callable returning the stub renderer's recorded invocations."""
    return lambda: read_calls(renderer_log)


@pytest.fixture
def wrapper_calls(wrapper_log):
    """Callable returning the stub wrapper's recorded invocations."""
    return lambda: read_calls(wrapper_log)
