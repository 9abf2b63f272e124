import pytest
from escapelog.auth import reset_identity_provider
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def escapelog_bed():
    from escapelog.domain import escapelog

    bed = DomainFixture(escapelog)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(escapelog_bed):
    with escapelog_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_identity_provider()
