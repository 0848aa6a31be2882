import factory
from faker import Faker

fake = Faker("pt_BR")


class RemitLineFactory(factory.Factory):
    class Meta:
        model = dict

    key = factory.Iterator(["bank", "agency", "account", "pix"])
    value = factory.LazyFunction(lambda: fake.numerify("#####-#"))


class RemitInformationFactory(factory.Factory):
    """
    Remit information payloads.

    Usage:
        payload = RemitInformationFactory()
        payload = RemitInformationFactory(lines=[])
    """

    class Meta:
        model = dict

    name = factory.LazyFunction(lambda: f"Conta {fake.company()}")

    @factory.lazy_attribute
    def lines(self):
        return [dict(RemitLineFactory()) for _ in range(2)]
