import os
from pathlib import Path

import pytest

# Keep password hashing cheap and tokens deterministic across the suite
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")
# Protean only auto-discovers one directory level below the domain root
os.environ.setdefault("DOMAIN_ROOT_PATH", str(Path(__file__).resolve().parent.parent / "src"))


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    from storefront.domain import storefront

    with storefront.domain_context():
        yield

    from storefront.identity.tokens import reset_token_service
    from storefront.utils.db import reset_data

    reset_data(storefront)
    reset_token_service()


# ---------------------------------------------------------------------------
# Builders shared by every area
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_category():
    from protean import current_domain

    from storefront.catalogue.category.management import CreateCategory

    def _make(name="Electronics", parent_id=None, **kwargs):
        return current_domain.process(CreateCategory(name=name, parent_id=parent_id, **kwargs), asynchronous=False)

    return _make


@pytest.fixture()
def subcategory_id(make_category):
    parent_id = make_category("Electronics")
    return make_category("Audio", parent_id=parent_id)


@pytest.fixture()
def make_product(subcategory_id):
    from protean import current_domain

    from storefront.catalogue.product.management import CreateProduct

    counter = {"n": 0}

    def _make(price=50.0, stock=10, name=None, **kwargs):
        counter["n"] += 1
        command = CreateProduct(
            name=name or f"Product {counter['n']}",
            description=kwargs.pop("description", "A product for testing"),
            price=price,
            subcategory_id=kwargs.pop("subcategory_id", subcategory_id),
            stock=stock,
            **kwargs,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_discount():
    from protean import current_domain

    from storefront.discounts.management import CreateDiscountCode

    def _make(code="SAVE20", percentage=20.0, expires_at=None):
        command = CreateDiscountCode(code=code, percentage=percentage, expires_at=expires_at)
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_customer():
    from protean import current_domain

    from storefront.identity.user.registration import RegisterUser

    def _make(username="jane", email=None, password="s3cret-pass", full_name=None):
        command = RegisterUser(
            username=username,
            email=email or f"{username}@example.com",
            password=password,
            full_name=full_name,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_admin():
    from protean import current_domain

    from storefront.identity.principal import Role
    from storefront.identity.user.passwords import hash_password
    from storefront.identity.user.user import User

    def _make(username="admin", password="admin123", role=Role.SUPER_ADMIN):
        user = User.register(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        current_domain.repository_for(User).add(user)
        return str(user.id)

    return _make


@pytest.fixture()
def token_for():
    from protean import current_domain

    from storefront.identity.tokens import get_token_service
    from storefront.identity.user.user import User

    def _token(user_id):
        user = current_domain.repository_for(User).get(user_id)
        return get_token_service().issue(user.principal)

    return _token


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from storefront.api.app import create_app

    return TestClient(create_app())


@pytest.fixture()
def admin_headers(make_admin, token_for):
    return {"Authorization": f"Bearer {token_for(make_admin())}"}


@pytest.fixture()
def customer_id(make_customer):
    return make_customer("jane")


@pytest.fixture()
def customer_headers(customer_id, token_for):
    return {"Authorization": f"Bearer {token_for(customer_id)}"}
