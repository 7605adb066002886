import pytest  # noqa

from pling import metrics
from tests.fakes import AUTH_URL, PUSH_URL, FakeTransport


@pytest.fixture
def transport():
    return FakeTransport({AUTH_URL: (200, "SID=abc\nLSID=def\nAuth=XYZ123\n"), PUSH_URL: (200, "id=0:1234")})


@pytest.fixture
def c2dm_config(transport):
    return {
        "email": "a@b.com",
        "password": "p",
        "source": "s",
        "authentication_url": AUTH_URL,
        "push_url": PUSH_URL,
        "adapter": transport,
    }


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()
