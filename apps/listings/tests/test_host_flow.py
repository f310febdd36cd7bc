import pytest

from apps.listings.models import Listing
from apps.listings.services import HostFlowStatus, derive_host_flow_status, get_host_flow_status


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], HostFlowStatus.NONE),
        (["REJECTED"], HostFlowStatus.NONE),
        (["DRAFT"], HostFlowStatus.DRAFT),
        (["DRAFT", "PENDING"], HostFlowStatus.PENDING),
        (["PENDING", "APPROVED", "DRAFT"], HostFlowStatus.APPROVED),
        (["approved"], HostFlowStatus.APPROVED),
    ],
)
def test_derive_host_flow_status_precedence(statuses, expected):
    assert derive_host_flow_status(statuses) == expected


def test_derivation_is_idempotent():
    statuses = ["DRAFT", "PENDING"]
    assert derive_host_flow_status(statuses) == derive_host_flow_status(statuses)


@pytest.mark.django_db
def test_host_without_listings(host):
    assert get_host_flow_status(host.id) == HostFlowStatus.NONE


@pytest.mark.django_db
def test_host_flow_follows_listing_statuses(host):
    Listing.objects.create(host=host, title="Draft room")
    assert get_host_flow_status(host.id) == HostFlowStatus.DRAFT

    Listing.objects.create(host=host, title="Submitted room", status=Listing.Status.PENDING)
    assert get_host_flow_status(host.id) == HostFlowStatus.PENDING

    Listing.objects.create(host=host, title="Live room", status=Listing.Status.APPROVED)
    assert get_host_flow_status(host.id) == HostFlowStatus.APPROVED
