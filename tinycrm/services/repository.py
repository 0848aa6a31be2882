"""
Persistence gateway.

One ``Repository`` wraps one ``AsyncSession`` (one per request). Every write
runs as a single transaction that either commits completely or is rolled
back, so callers never observe half-replaced invoice lines or a parent row
deleted without its children.

Delete rules:
- RemitInformation and Invoice delete their lines first, then the parent.
- Company, Product and RemitInformation deletes are refused while an invoice
  (or invoice line) still references them.

Invoice and RemitInformation reads eagerly load their children, products and
companies so a single call returns the fully resolved aggregate.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tinycrm.exceptions import (
    IntegrityViolationError,
    NotFoundError,
    PersistenceError,
    TinyCRMException,
)
from tinycrm.models import (
    Company,
    Invoice,
    InvoiceLine,
    Product,
    RemitInformation,
    RemitInformationLine,
    User,
)
from tinycrm.schemas import (
    CompanyCreate,
    CompanyUpdate,
    InvoiceIn,
    ProductCreate,
    ProductUpdate,
    RemitInformationIn,
)

logger = logging.getLogger(__name__)

NIL_UUID = uuid.UUID(int=0)


def _assigned_uuid(value: Optional[uuid.UUID]) -> Optional[uuid.UUID]:
    """Client-supplied invoice UUID, or None when unset / all zeros."""
    if value is None or value == NIL_UUID:
        return None
    return value


class Repository:
    """CRUD operations for every entity, bound to one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Transaction helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _write(self, action: str):
        """Run the block and commit; roll everything back on any failure."""
        try:
            yield
            await self.session.commit()
        except TinyCRMException:
            await self.session.rollback()
            raise
        except IntegrityError as e:
            await self.session.rollback()
            logger.error("Integrity violation during %s: %s", action, e.orig)
            raise IntegrityViolationError(f"Could not {action}: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database error during %s: %s: %s", action, type(e).__name__, e)
            raise PersistenceError(f"Could not {action}: {e}") from e

    async def _all(self, stmt) -> list:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Database error while listing: %s: %s", type(e).__name__, e)
            raise PersistenceError(str(e)) from e
        return list(result.scalars().all())

    async def _one(self, stmt, resource: str, resource_id: int):
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Database error while loading %s %s: %s", resource, resource_id, e)
            raise PersistenceError(str(e)) from e
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(resource, resource_id)
        return record

    async def _exists(self, model, record_id: int) -> bool:
        found = await self.session.scalar(select(model.id).where(model.id == record_id))
        return found is not None

    async def _require(self, model, record_id: int, resource: str) -> None:
        if not await self._exists(model, record_id):
            raise NotFoundError(resource, record_id)

    async def _count(self, stmt) -> int:
        return (await self.session.scalar(stmt)) or 0

    # ------------------------------------------------------------------
    # Companies
    # ------------------------------------------------------------------

    async def get_company(self, company_id: int) -> Company:
        stmt = (
            select(Company)
            .where(Company.id == company_id)
            .execution_options(populate_existing=True)
        )
        return await self._one(stmt, "Company", company_id)

    async def list_companies(self) -> list[Company]:
        return await self._all(select(Company).order_by(Company.id))

    async def create_company(self, data: CompanyCreate) -> Company:
        company = Company(**data.model_dump())
        async with self._write("create company"):
            self.session.add(company)
        logger.info("Created company %s (%s)", company.id, company.name)
        return company

    async def update_company(self, company_id: int, data: CompanyUpdate) -> Company:
        async with self._write("update company"):
            company = await self.get_company(company_id)
            for key, value in data.model_dump().items():
                setattr(company, key, value)
        logger.info("Updated company %s", company_id)
        return company

    async def delete_company(self, company_id: int) -> None:
        async with self._write("delete company"):
            await self._require(Company, company_id, "Company")
            referencing = await self._count(
                select(func.count(Invoice.id)).where(
                    or_(Invoice.company_id == company_id, Invoice.client_id == company_id)
                )
            )
            if referencing:
                raise IntegrityViolationError(
                    f"Company {company_id} is referenced by {referencing} invoice(s) and cannot be deleted"
                )
            await self.session.execute(delete(Company).where(Company.id == company_id))
        logger.info("Deleted company %s", company_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def get_product(self, product_id: int) -> Product:
        stmt = (
            select(Product)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return await self._one(stmt, "Product", product_id)

    async def list_products(self) -> list[Product]:
        return await self._all(select(Product).order_by(Product.id))

    async def create_product(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        async with self._write("create product"):
            self.session.add(product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        async with self._write("update product"):
            product = await self.get_product(product_id)
            for key, value in data.model_dump().items():
                setattr(product, key, value)
        logger.info("Updated product %s", product_id)
        return product

    async def delete_product(self, product_id: int) -> None:
        async with self._write("delete product"):
            await self._require(Product, product_id, "Product")
            referencing = await self._count(
                select(func.count(InvoiceLine.id)).where(InvoiceLine.product_id == product_id)
            )
            if referencing:
                raise IntegrityViolationError(
                    f"Product {product_id} is referenced by {referencing} invoice line(s) and cannot be deleted"
                )
            await self.session.execute(delete(Product).where(Product.id == product_id))
        logger.info("Deleted product %s", product_id)

    # ------------------------------------------------------------------
    # Remit information
    # ------------------------------------------------------------------

    def _remit_query(self):
        return (
            select(RemitInformation)
            .options(selectinload(RemitInformation.lines))
            .execution_options(populate_existing=True)
        )

    async def get_remit_information(self, remit_id: int) -> RemitInformation:
        stmt = self._remit_query().where(RemitInformation.id == remit_id)
        return await self._one(stmt, "RemitInformation", remit_id)

    async def list_remit_information(self) -> list[RemitInformation]:
        return await self._all(self._remit_query().order_by(RemitInformation.id))

    async def create_remit_information(self, data: RemitInformationIn) -> RemitInformation:
        remit = RemitInformation(
            name=data.name,
            lines=[RemitInformationLine(key=line.key, value=line.value) for line in data.lines],
        )
        async with self._write("create remit information"):
            self.session.add(remit)
        logger.info("Created remit information %s with %d line(s)", remit.id, len(data.lines))
        return await self.get_remit_information(remit.id)

    async def update_remit_information(self, remit_id: int, data: RemitInformationIn) -> RemitInformation:
        async with self._write("update remit information"):
            remit = await self.get_remit_information(remit_id)
            remit.lines.clear()
            await self.session.flush()

            remit.name = data.name
            remit.lines.extend(
                RemitInformationLine(key=line.key, value=line.value) for line in data.lines
            )
        logger.info("Updated remit information %s", remit_id)
        return await self.get_remit_information(remit_id)

    async def delete_remit_information(self, remit_id: int) -> None:
        async with self._write("delete remit information"):
            await self._require(RemitInformation, remit_id, "RemitInformation")
            referencing = await self._count(
                select(func.count(Invoice.id)).where(Invoice.remit_information_id == remit_id)
            )
            if referencing:
                raise IntegrityViolationError(
                    f"RemitInformation {remit_id} is referenced by {referencing} invoice(s) and cannot be deleted"
                )
            await self.session.execute(
                delete(RemitInformationLine).where(RemitInformationLine.remit_information_id == remit_id)
            )
            await self.session.execute(delete(RemitInformation).where(RemitInformation.id == remit_id))
        logger.info("Deleted remit information %s", remit_id)

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    def _invoice_query(self):
        return (
            select(Invoice)
            .options(
                selectinload(Invoice.invoice_lines).selectinload(InvoiceLine.product),
                selectinload(Invoice.remit_information).selectinload(RemitInformation.lines),
                selectinload(Invoice.company),
                selectinload(Invoice.client),
            )
            .execution_options(populate_existing=True)
        )

    async def get_invoice(self, invoice_id: int) -> Invoice:
        stmt = self._invoice_query().where(Invoice.id == invoice_id)
        return await self._one(stmt, "Invoice", invoice_id)

    async def list_invoices(self) -> list[Invoice]:
        return await self._all(self._invoice_query().order_by(Invoice.id))

    async def _check_invoice_references(self, data: InvoiceIn) -> None:
        """Refuse to write an invoice pointing at rows that do not exist."""
        references = [
            (Company, data.company_id, "company"),
            (Company, data.client_id, "client company"),
            (RemitInformation, data.remit_information_id, "remit information"),
        ]
        for model, record_id, label in references:
            if not await self._exists(model, record_id):
                raise IntegrityViolationError(f"Invoice references unknown {label} {record_id}")

        product_ids = {line.product_id for line in data.invoice_lines}
        if product_ids:
            found = set(
                (await self.session.scalars(select(Product.id).where(Product.id.in_(product_ids)))).all()
            )
            missing = sorted(product_ids - found)
            if missing:
                raise IntegrityViolationError(
                    f"Invoice references unknown product(s) {', '.join(str(i) for i in missing)}"
                )

    @staticmethod
    def _invoice_fields(data: InvoiceIn) -> dict:
        fields = data.model_dump(exclude={"uuid", "issue_date", "invoice_lines"})
        if fields["number"] is None:
            fields["number"] = 0
        return fields

    @staticmethod
    def _new_lines(lines: Iterable) -> list[InvoiceLine]:
        return [InvoiceLine(**line.model_dump()) for line in lines]

    async def create_invoice(self, data: InvoiceIn) -> Invoice:
        invoice = Invoice(
            **self._invoice_fields(data),
            uuid=_assigned_uuid(data.uuid) or uuid.uuid4(),
        )
        if data.issue_date is not None:
            invoice.issue_date = data.issue_date
        invoice.invoice_lines = self._new_lines(data.invoice_lines)

        async with self._write("create invoice"):
            await self._check_invoice_references(data)
            self.session.add(invoice)
        logger.info(
            "Created invoice %s (%s) with %d line(s)", invoice.id, invoice.uuid, len(data.invoice_lines)
        )
        return await self.get_invoice(invoice.id)

    async def update_invoice(self, invoice_id: int, data: InvoiceIn) -> Invoice:
        """Replace every field and the whole line set in one transaction."""
        async with self._write("update invoice"):
            stmt = (
                select(Invoice)
                .options(selectinload(Invoice.invoice_lines))
                .where(Invoice.id == invoice_id)
                .execution_options(populate_existing=True)
            )
            invoice = await self._one(stmt, "Invoice", invoice_id)
            await self._check_invoice_references(data)

            # Old lines are deleted before the replacement set is inserted
            invoice.invoice_lines.clear()
            await self.session.flush()

            for key, value in self._invoice_fields(data).items():
                setattr(invoice, key, value)
            new_uuid = _assigned_uuid(data.uuid)
            if new_uuid is not None:
                invoice.uuid = new_uuid
            if data.issue_date is not None:
                invoice.issue_date = data.issue_date
            invoice.invoice_lines.extend(self._new_lines(data.invoice_lines))
        logger.info("Updated invoice %s with %d line(s)", invoice_id, len(data.invoice_lines))
        return await self.get_invoice(invoice_id)

    async def delete_invoice(self, invoice_id: int) -> None:
        async with self._write("delete invoice"):
            await self._require(Invoice, invoice_id, "Invoice")
            await self.session.execute(delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id))
            await self.session.execute(delete(Invoice).where(Invoice.id == invoice_id))
        logger.info("Deleted invoice %s", invoice_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(self, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash)
        async with self._write("create user"):
            self.session.add(user)
        logger.info("Created user %s", username)
        return user
