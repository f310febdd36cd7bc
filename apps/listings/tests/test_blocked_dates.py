"""Host blocked-date services and API."""

from __future__ import annotations

from datetime import date

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.domain.errors import ErrorKind
from apps.listings.models import Listing, ListingBlockedDate
from apps.listings.services import blocked_dates_between, block_date, list_blocked_dates, unblock_date

User = get_user_model()


@pytest.mark.django_db
def test_block_date_is_idempotent(listing, host):
    first = block_date(listing.id, host.id, date(2026, 3, 2))
    second = block_date(listing.id, host.id, date(2026, 3, 2))

    assert first.value is True
    assert second.value is False
    assert ListingBlockedDate.objects.filter(listing=listing).count() == 1


@pytest.mark.django_db
def test_unblock_date(listing, host):
    block_date(listing.id, host.id, date(2026, 3, 2))

    assert unblock_date(listing.id, host.id, date(2026, 3, 2)).value is True
    assert unblock_date(listing.id, host.id, date(2026, 3, 2)).value is False
    assert not ListingBlockedDate.objects.exists()


@pytest.mark.django_db
def test_only_the_host_can_block(listing, guest):
    result = block_date(listing.id, guest.id, date(2026, 3, 2))

    assert result.error.kind == ErrorKind.NOT_FOUND
    assert not ListingBlockedDate.objects.exists()


@pytest.mark.django_db
def test_blocked_dates_between_is_half_open(listing):
    for day in (date(2026, 3, 1), date(2026, 3, 3), date(2026, 3, 5)):
        ListingBlockedDate.objects.create(listing=listing, date=day)

    assert blocked_dates_between(listing.id, date(2026, 3, 1), date(2026, 3, 5)) == [
        date(2026, 3, 1),
        date(2026, 3, 3),
    ]


@pytest.mark.django_db
def test_list_blocked_dates_rejects_inverted_range(listing, host):
    result = list_blocked_dates(listing.id, host.id, date(2026, 3, 5), date(2026, 3, 1))
    assert result.error.kind == ErrorKind.INVALID_DATE_RANGE


class BlockedDatesAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(username="host", password="HostPass123")
        self.guest = User.objects.create_user(username="guest", password="GuestPass123")
        self.listing = Listing.objects.create(host=self.host, title="Seaside loft", status=Listing.Status.APPROVED)
        self.url = reverse("listing-blocked-dates", args=[self.listing.id])

    def test_host_blocks_and_lists_dates(self) -> None:
        self.client.force_authenticate(self.host)

        created = self.client.post(self.url, {"date": "2026-03-02"}, format="json")
        repeated = self.client.post(self.url, {"date": "2026-03-02"}, format="json")
        listed = self.client.get(self.url, {"start": "2026-03-01", "end": "2026-04-01"})

        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(repeated.status_code, status.HTTP_200_OK)
        self.assertEqual(listed.data["dates"], ["2026-03-02"])

    def test_host_unblocks_date(self) -> None:
        ListingBlockedDate.objects.create(listing=self.listing, date=date(2026, 3, 2))
        self.client.force_authenticate(self.host)

        response = self.client.delete(f"{self.url}?date=2026-03-02")

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ListingBlockedDate.objects.exists())

    def test_other_user_gets_not_found(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.post(self.url, {"date": "2026-03-02"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "NotFound")
