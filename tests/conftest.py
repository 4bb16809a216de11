from __future__ import annotations

import pytest

from src.erp_dashboard.erp_dashboard.core.enums import AppRole
from src.erp_dashboard.erp_dashboard.main import create_app
from fakes import FakeCrudRepo, FakeUserRepo, build_fake_container


@pytest.fixture
def users():
    repo = FakeUserRepo()
    repo.add("admin@example.com", "secret123", role=AppRole.SUPER_ADMIN, full_name="Asha Admin")
    repo.add("viewer@example.com", "secret123", role=AppRole.VIEWER, full_name="Vikram Viewer")
    return repo


@pytest.fixture
def crud_repos():
    return {
        "raw_materials": FakeCrudRepo(
            [
                {"code": "RM-001", "name": "LDPE Granules", "unit": "Kg", "current_stock": 40,
                 "min_stock_level": 50, "rate": 95},
            ]
        ),
        "customers": FakeCrudRepo(
            [{"code": "CUS-001", "name": "Sharma Traders"}],
            options={},
        ),
        "sales_invoices": FakeCrudRepo(options={"customers": [{"id": 1, "label": "Sharma Traders"}]}),
    }


@pytest.fixture
def container(users, crud_repos):
    return build_fake_container(users=users, crud_repos=crud_repos)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in(client, role: AppRole, user_id: int = 1):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["email"] = f"{role.value}@example.com"
        sess["name"] = role.label
        sess["role"] = role.value


@pytest.fixture
def login():
    return sign_in
