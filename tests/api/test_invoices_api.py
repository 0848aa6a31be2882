"""
Tests for the invoices API endpoints (/api/invoices).
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from pydantic import TypeAdapter
from sqlalchemy import func, select

from factories import InvoiceFactory, InvoiceLineFactory
from tinycrm.models import InvoiceLine

INVOICES = "/api/invoices"


def _payload(records: dict, **overrides) -> dict:
    defaults = dict(
        company_id=records["company_id"],
        client_id=records["client_id"],
        remit_information_id=records["remit_information_id"],
        invoice_lines=[
            InvoiceLineFactory(product_id=records["widget_id"], quantity=3),
            InvoiceLineFactory(product_id=records["service_id"], quantity=2),
        ],
    )
    defaults.update(overrides)
    return InvoiceFactory(**defaults)


async def _create(client: AsyncClient, payload: dict) -> dict:
    response = await client.post(INVOICES, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestInvoiceCreate:

    @pytest.mark.asyncio
    async def test_returns_resolved_aggregate(self, authenticated_client: AsyncClient, base_records):
        body = await _create(authenticated_client, _payload(base_records))

        assert body["company"]["name"] == "Test Company Ltd"
        assert body["client"]["name"] == "Client Co  Ltda"
        assert body["remit_information"]["name"] == "Main account"
        assert [line["key"] for line in body["remit_information"]["lines"]] == ["bank", "account"]
        assert [line["product"]["name"] for line in body["invoice_lines"]] == ["Widget", "Service Hour"]
        assert uuid.UUID(body["uuid"]).int != 0

    @pytest.mark.asyncio
    async def test_total_arithmetic(self, authenticated_client: AsyncClient, base_records):
        body = await _create(
            authenticated_client,
            _payload(base_records, discount=4, penalty=1.10),
        )

        assert [line["total"] for line in body["invoice_lines"]] == [31.5, 6.5]
        assert body["subtotal"] == 38.0
        assert body["total"] == pytest.approx(35.10)

    @pytest.mark.asyncio
    async def test_derived_labels(self, authenticated_client: AsyncClient, base_records):
        body = await _create(authenticated_client, _payload(base_records, number=None))

        assert body["identification"] == body["uuid"]
        assert body["display_name"] == "ClientCoLtda_invoice_20250310"
        assert body["due_month"] == "Abril"

    @pytest.mark.asyncio
    async def test_number_used_as_identification(self, authenticated_client: AsyncClient, base_records):
        body = await _create(authenticated_client, _payload(base_records, number=42))
        assert body["identification"] == "42"

    @pytest.mark.asyncio
    async def test_negative_number_accepted(self, authenticated_client: AsyncClient, base_records):
        body = await _create(authenticated_client, _payload(base_records, number=-5))
        assert body["number"] == -5
        assert body["identification"] == "-5"

    @pytest.mark.asyncio
    async def test_dates_with_offset_keep_their_instant(self, authenticated_client: AsyncClient, base_records):
        sent = "2025-03-10T23:30:00-03:00"
        created = await _create(
            authenticated_client,
            _payload(base_records, issue_date=sent, due_date="2025-04-09T23:30:00-03:00"),
        )
        fetched = (await authenticated_client.get(f"{INVOICES}/{created['id']}")).json()

        as_datetime = TypeAdapter(datetime).validate_python
        for body in (created, fetched):
            issue_date = as_datetime(body["issue_date"])
            assert issue_date == as_datetime(sent)
            assert issue_date.utcoffset() == timedelta(0)
            assert as_datetime(body["due_date"]) == datetime(2025, 4, 10, 2, 30, tzinfo=timezone.utc)

        # Labels follow the UTC date
        assert fetched["display_name"] == "ClientCoLtda_invoice_20250311"
        assert fetched["due_month"] == "Abril"

    @pytest.mark.asyncio
    async def test_naive_dates_read_back_as_utc(self, authenticated_client: AsyncClient, base_records):
        created = await _create(authenticated_client, _payload(base_records))
        issue_date = TypeAdapter(datetime).validate_python(created["issue_date"])
        assert issue_date == datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_each_invoice_gets_distinct_uuid(self, authenticated_client: AsyncClient, base_records):
        first = await _create(authenticated_client, _payload(base_records))
        second = await _create(authenticated_client, _payload(base_records))
        assert first["uuid"] != second["uuid"]

    @pytest.mark.asyncio
    async def test_unknown_product_is_500(self, authenticated_client: AsyncClient, base_records):
        payload = _payload(base_records, invoice_lines=[InvoiceLineFactory(product_id=9999)])
        response = await authenticated_client.post(INVOICES, json=payload)

        assert response.status_code == 500
        assert response.json()["code"] == "DB_002"
        assert (await authenticated_client.get(INVOICES)).json() == []

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            INVOICES,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_zero_quantity_is_400(self, authenticated_client: AsyncClient, base_records):
        payload = _payload(
            base_records,
            invoice_lines=[InvoiceLineFactory(product_id=base_records["widget_id"], quantity=0)],
        )
        response = await authenticated_client.post(INVOICES, json=payload)
        assert response.status_code == 400


class TestInvoiceUpdate:

    @pytest.mark.asyncio
    async def test_put_replaces_lines(self, authenticated_client: AsyncClient, base_records, test_db):
        created = await _create(authenticated_client, _payload(base_records))

        payload = _payload(
            base_records,
            paid=True,
            invoice_lines=[InvoiceLineFactory(product_id=base_records["service_id"], quantity=4)],
        )
        response = await authenticated_client.put(f"{INVOICES}/{created['id']}", json=payload)
        assert response.status_code == 200, response.text
        body = response.json()

        assert body["paid"] is True
        assert [(line["product_id"], line["quantity"]) for line in body["invoice_lines"]] == [
            (base_records["service_id"], 4)
        ]
        assert body["total"] == 13.0

        stored = await test_db.scalar(
            select(func.count(InvoiceLine.id)).where(InvoiceLine.invoice_id == created["id"])
        )
        assert stored == 1

    @pytest.mark.asyncio
    async def test_put_keeps_uuid_when_omitted(self, authenticated_client: AsyncClient, base_records):
        created = await _create(authenticated_client, _payload(base_records))

        response = await authenticated_client.put(f"{INVOICES}/{created['id']}", json=_payload(base_records))
        assert response.json()["uuid"] == created["uuid"]

    @pytest.mark.asyncio
    async def test_put_unknown_is_404(self, authenticated_client: AsyncClient, base_records):
        response = await authenticated_client.put(f"{INVOICES}/555", json=_payload(base_records))
        assert response.status_code == 404


class TestInvoiceReadDelete:

    @pytest.mark.asyncio
    async def test_get_and_list(self, authenticated_client: AsyncClient, base_records):
        created = await _create(authenticated_client, _payload(base_records))

        fetched = await authenticated_client.get(f"{INVOICES}/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == created

        listed = (await authenticated_client.get(INVOICES)).json()
        assert [invoice["id"] for invoice in listed] == [created["id"]]

    @pytest.mark.asyncio
    async def test_delete_removes_lines(self, authenticated_client: AsyncClient, base_records, test_db):
        created = await _create(authenticated_client, _payload(base_records))

        response = await authenticated_client.delete(f"{INVOICES}/{created['id']}")
        assert response.status_code == 204

        remaining = await test_db.scalar(select(func.count(InvoiceLine.id)))
        assert remaining == 0
        assert (await authenticated_client.get(f"{INVOICES}/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_referenced_product_cannot_be_deleted(self, authenticated_client: AsyncClient, base_records):
        await _create(authenticated_client, _payload(base_records))

        response = await authenticated_client.delete(f"/api/products/{base_records['widget_id']}")
        assert response.status_code == 500
        assert (await authenticated_client.get(f"/api/products/{base_records['widget_id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_referenced_company_cannot_be_deleted(self, authenticated_client: AsyncClient, base_records):
        await _create(authenticated_client, _payload(base_records))

        response = await authenticated_client.delete(f"/api/companies/{base_records['client_id']}")
        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/problem+json")

    @pytest.mark.asyncio
    async def test_unknown_and_invalid_ids(self, authenticated_client: AsyncClient):
        assert (await authenticated_client.get(f"{INVOICES}/31337")).status_code == 404
        assert (await authenticated_client.get(f"{INVOICES}/not-a-number")).status_code == 400
        assert (await authenticated_client.delete(f"{INVOICES}/31337")).status_code == 404
