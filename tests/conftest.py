import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config environment before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def container():
    """A container wired to in-memory adapters only."""
    from storefront.cache import MemoryCache
    from storefront.config import Settings
    from storefront.container import Container
    from storefront.media import FakeImageHost
    from storefront.payments.gateway import FakeGateway

    return Container.build(
        settings=Settings(env="test", client_url="http://shop.test"),
        cache=MemoryCache(),
        gateway=FakeGateway(),
        image_host=FakeImageHost(),
    )


@pytest.fixture()
def client(container):
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from storefront.api import install

    app = FastAPI()
    install(app, container)
    return TestClient(app)


@pytest.fixture()
def make_user():
    """Register a shopper through the registration command and return the stored user."""
    from protean.utils.globals import current_domain
    from storefront.identity.registration import PromoteToAdmin, RegisterUser
    from storefront.identity.user import User

    def _make_user(email="shopper@example.com", password="secret123", name="Shopper", admin=False):
        user_id = current_domain.process(
            RegisterUser(name=name, email=email, password=password),
            asynchronous=False,
        )
        if admin:
            current_domain.process(PromoteToAdmin(email=email), asynchronous=False)
        return current_domain.repository_for(User).get(user_id)

    return _make_user


@pytest.fixture()
def make_product():
    from protean.utils.globals import current_domain
    from storefront.catalogue.product import Product

    def _make_product(name="Denim Jacket", price=89.99, category="jackets", featured=False, **overrides):
        product = Product.create(
            name=name,
            description=overrides.pop("description", f"{name} description"),
            price=price,
            category=category,
            image=overrides.pop("image", ""),
        )
        if featured:
            product.is_featured = True
        current_domain.repository_for(Product).add(product)
        return product

    return _make_product
