"""API tests for bank account endpoints."""

from uuid import uuid4


class TestBankAccountEndpoints:
    """Tests for /api/v1/bank-accounts."""

    def test_create(self, bank_account):
        assert bank_account["name"] == "Operating"
        assert bank_account["currency"] == "EUR"
        assert bank_account["balance"] == "0.00"
        assert bank_account["is_active"] is True

    def test_currency_is_upper_cased(self, test_client, api_v1_prefix, tenant_headers):
        response = test_client.post(
            f"{api_v1_prefix}/bank-accounts",
            json={"name": "Dollars", "account_number": "US-1", "currency": "usd"},
            headers=tenant_headers,
        )

        assert response.status_code == 201
        assert response.json()["currency"] == "USD"

    def test_list(self, test_client, api_v1_prefix, tenant_headers, bank_account):
        response = test_client.get(
            f"{api_v1_prefix}/bank-accounts",
            headers=tenant_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["accounts"][0]["id"] == bank_account["id"]

    def test_get_unknown_account(self, test_client, api_v1_prefix, tenant_headers):
        response = test_client.get(
            f"{api_v1_prefix}/bank-accounts/{uuid4()}",
            headers=tenant_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "BANK_ACCOUNT_NOT_FOUND"

    def test_patch(self, test_client, api_v1_prefix, tenant_headers, bank_account):
        response = test_client.patch(
            f"{api_v1_prefix}/bank-accounts/{bank_account['id']}",
            json={"name": "Payroll", "bank_name": "Swedbank"},
            headers=tenant_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Payroll"
        assert data["bank_name"] == "Swedbank"
        assert data["account_number"] == bank_account["account_number"]

    def test_default_is_exclusive(
        self,
        test_client,
        api_v1_prefix,
        tenant_headers,
        bank_account,
    ):
        url = f"{api_v1_prefix}/bank-accounts"
        test_client.patch(
            f"{url}/{bank_account['id']}",
            json={"is_default": True},
            headers=tenant_headers,
        )
        second = test_client.post(
            url,
            json={"name": "Savings", "account_number": "EE-2", "is_default": True},
            headers=tenant_headers,
        ).json()

        accounts = test_client.get(url, headers=tenant_headers).json()["accounts"]

        defaults = [a["id"] for a in accounts if a["is_default"]]
        assert defaults == [second["id"]]

    def test_delete(self, test_client, api_v1_prefix, tenant_headers, bank_account):
        url = f"{api_v1_prefix}/bank-accounts/{bank_account['id']}"

        response = test_client.delete(url, headers=tenant_headers)

        assert response.status_code == 204
        assert test_client.get(url, headers=tenant_headers).status_code == 404


class TestTenantHeaders:
    """Requests are scoped by the gateway headers."""

    def test_missing_headers(self, test_client, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/bank-accounts")

        assert response.status_code == 401

    def test_malformed_tenant_id(self, test_client, api_v1_prefix, tenant_headers):
        headers = {**tenant_headers, "X-Tenant-ID": "not-a-uuid"}

        response = test_client.get(f"{api_v1_prefix}/bank-accounts", headers=headers)

        assert response.status_code == 400

    def test_other_tenant_cannot_see_account(
        self,
        test_client,
        api_v1_prefix,
        other_tenant_headers,
        bank_account,
    ):
        url = f"{api_v1_prefix}/bank-accounts"

        single = test_client.get(
            f"{url}/{bank_account['id']}",
            headers=other_tenant_headers,
        )
        listing = test_client.get(url, headers=other_tenant_headers)

        assert single.status_code == 404
        assert listing.json()["total"] == 0


class TestHealth:
    """The health endpoint needs no tenant."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
