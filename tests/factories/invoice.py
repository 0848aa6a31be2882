"""
Invoice test factory.

Referenced ids (company, client, remit information, products) must be
passed in; everything else gets realistic defaults.
"""

import factory
from faker import Faker
from datetime import datetime, timedelta

fake = Faker()


class InvoiceLineFactory(factory.Factory):
    """Line payload; pass product_id."""

    class Meta:
        model = dict

    product_id = None
    quantity = factory.LazyFunction(lambda: fake.random_int(min=1, max=5))
    description = factory.LazyFunction(
        lambda: fake.sentence(nb_words=4) if fake.boolean(chance_of_getting_true=30) else None
    )


class InvoiceFactory(factory.Factory):
    """
    Invoice payload factory.

    Usage:
        payload = InvoiceFactory(company_id=1, client_id=2, remit_information_id=1,
                                 invoice_lines=[InvoiceLineFactory(product_id=1)])
    """

    class Meta:
        model = dict

    company_id = None
    client_id = factory.SelfAttribute("company_id")
    remit_information_id = None
    number = None
    additional_information = factory.LazyFunction(
        lambda: fake.sentence() if fake.boolean(chance_of_getting_true=30) else None
    )
    discount = 0
    penalty = 0
    paid = False
    issue_date = factory.LazyFunction(lambda: datetime(2025, 3, 10, 9, 30).isoformat())

    @factory.lazy_attribute
    def due_date(self):
        issue = datetime.fromisoformat(self.issue_date)
        return (issue + timedelta(days=30)).isoformat()

    invoice_lines = factory.LazyFunction(list)
