import threading

import pytest
import requests

from models import Page

SITE = "https://site.test"

CLASSES_HTML = """<html><head><title> Class Timings </title></head>
<body>
<h1>Class timings</h1>
<p>Our morning class time is 6 AM to 7 AM on weekdays, and every session starts with breathing.
The evening classes run from 6 PM to 7:30 PM, which is the most popular time for working students.
Weekend classes begin at 8 AM and last a little longer than the weekday sessions.
Please arrive ten minutes early so the teacher can start on time and nobody misses the warm up.
Beginners should pick the slow flow batch, since it keeps a gentle pace for the first month.
Advanced students can join the power batch, which focuses on strength, balance and longer holds.
Mats are provided at the studio, but many regulars prefer to bring their own mat and a towel.
If you cannot attend a session, let us know a day before so another student can take the place.
Private lessons are available on request and can be scheduled at a time that suits you best.
Holiday timings are announced on the notice board and on this page a week before each holiday.</p>
<script>var time = "not prose";</script>
</body></html>"""


def home_html(links=(), body_attrs="", extra=""):
    anchors = "".join(f'<a href="{href}">link</a>' for href in links)
    return (f"<html><head><title>Yoga Studio</title></head><body {body_attrs}>"
            f"<p>Welcome to the yoga studio. We teach calm, strong and happy practice.</p>"
            f"{extra}{anchors}</body></html>")


class FakeResponse:
    def __init__(self, status_code=200, text="", content_type="text/html; charset=utf-8"):
        self.status_code = status_code
        self.text = text
        self.headers = {"content-type": content_type} if content_type else {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session: url → markup, Exception or FakeResponse."""

    def __init__(self, routes=None, gate=None):
        self.routes = dict(routes or {})
        self.gate = gate
        self.calls = []

    def get(self, url, timeout=None, **_kw):
        self.calls.append(url)
        if self.gate is not None:
            self.gate.wait(5)
        target = self.routes.get(url)
        if isinstance(target, Exception):
            raise target
        if isinstance(target, FakeResponse):
            return target
        if target is None:
            return FakeResponse(404, "Not found")
        return FakeResponse(200, target)


@pytest.fixture
def classes_page():
    return CLASSES_HTML


@pytest.fixture
def home_page():
    return Page(url=f"{SITE}/index.html", html=home_html(["/classes.html"]))


@pytest.fixture
def gate():
    ev = threading.Event()
    yield ev
    ev.set()
