import pytest


@pytest.fixture(autouse=True)
def sms_outbox():
    from production.notifications import LocmemSmsBackend

    LocmemSmsBackend.reset()
    yield LocmemSmsBackend.outbox
    LocmemSmsBackend.reset()
