"""End-to-end tests: argv in, one mocked request, rendered output and exit code out."""

import json

import pytest

from taxjar_cli.core.config import ConfigStore, EnvSettings

TAX_ARGS = [
    "tax", "calculate",
    "--from-country", "US", "--from-zip", "94025", "--from-state", "CA",
    "--to-country", "US", "--to-zip", "10001", "--to-state", "NY",
    "--amount", "100.00",
]

REFUND_ARGS = [
    "--transaction-id", "REFUND-1", "--transaction-date", "2024-01-20",
    "--transaction-reference-id", "ORDER-123",
    "--to-country", "US", "--to-zip", "10001", "--to-state", "NY",
    "--amount", "-105", "--shipping", "-5", "--sales-tax", "-8.88",
]

TAX_RESPONSE = {
    "tax": {
        "order_total_amount": 105.0,
        "shipping": 5.0,
        "taxable_amount": 100.0,
        "amount_to_collect": 8.88,
        "rate": 0.08875,
        "has_nexus": True,
        "freight_taxable": False,
        "breakdown": {
            "state_tax_collectable": 4.0,
            "county_tax_collectable": 0.0,
            "city_tax_collectable": 4.5,
            "special_district_tax_collectable": 0.38,
        },
    }
}

REGIONS = [
    {"country_code": "US", "country": "United States", "region_code": "NY", "region": "New York"},
    {"country_code": "US", "country": "United States", "region_code": "CA", "region": "California"},
]

ORDER = {
    "transaction_id": "ORDER-123",
    "transaction_date": "2024-01-15T00:00:00Z",
    "to_country": "US",
    "to_zip": "10001",
    "to_state": "NY",
    "to_city": "New York",
    "amount": "105.0",
    "shipping": "5.0",
    "sales_tax": "8.88",
    "line_items": [
        {"id": "1", "description": "Widget", "quantity": 2, "unit_price": "50.0", "sales_tax": "8.88"},
    ],
}


class TestTaxCalculate:
    """Scenario A and the required-only request shape."""

    def test_scenario_a(self, run_cli, mock_api, capsys):
        mock_api.add("POST", "/v2/taxes", json_body=TAX_RESPONSE)

        code = run_cli(*TAX_ARGS, "--shipping", "5.00")

        assert code == 0
        assert len(mock_api.requests) == 1
        body = mock_api.last_json()
        assert body["from_zip"] == "94025"
        assert body["from_state"] == "CA"
        assert body["to_zip"] == "10001"
        assert body["to_state"] == "NY"
        assert body["amount"] == 100
        assert body["shipping"] == 5
        out = capsys.readouterr().out
        assert "$8.88" in out
        assert "8.8750%" in out
        assert "Breakdown" in out

    def test_required_only_sends_no_optional_fields(self, run_cli, mock_api):
        mock_api.add("POST", "/v2/taxes", json_body=TAX_RESPONSE)

        run_cli(*TAX_ARGS)

        assert set(mock_api.last_json()) == {
            "from_country", "from_zip", "from_state",
            "to_country", "to_zip", "to_state", "amount", "shipping",
        }

    def test_optional_fields_sent_when_given(self, run_cli, mock_api):
        mock_api.add("POST", "/v2/taxes", json_body=TAX_RESPONSE)

        run_cli(*TAX_ARGS, "--to-city", "New York", "--to-street", "350 5th Ave")

        body = mock_api.last_json()
        assert body["to_city"] == "New York"
        assert body["to_street"] == "350 5th Ave"
        assert "from_city" not in body

    @pytest.mark.parametrize("value", ["abc", "12.3.4", "NaN", "inf", ""])
    def test_non_numeric_amount_fails_before_request(self, run_cli, mock_api, capsys, value):
        args = [a if a != "100.00" else value for a in TAX_ARGS]

        code = run_cli(*args)

        assert code == 1
        assert mock_api.requests == []
        assert "invalid amount" in capsys.readouterr().err

    def test_amount_beyond_float_precision_fails_before_request(self, run_cli, mock_api, capsys):
        args = [a if a != "100.00" else "12345678901234567.89" for a in TAX_ARGS]

        assert run_cli(*args) == 1
        assert mock_api.requests == []
        assert "too many digits" in capsys.readouterr().err

    def test_missing_required_flag(self, run_cli, mock_api, capsys):
        code = run_cli(*TAX_ARGS[:-2])

        assert code == 1
        assert mock_api.requests == []
        assert "--amount" in capsys.readouterr().err

    def test_json_output_has_no_labels(self, run_cli, mock_api, capsys):
        mock_api.add("POST", "/v2/taxes", json_body=TAX_RESPONSE)

        code = run_cli(*TAX_ARGS, "--json")

        out = capsys.readouterr().out
        assert code == 0
        data = json.loads(out)
        assert data == TAX_RESPONSE["tax"]
        assert json.loads(json.dumps(data)) == data
        assert "Tax to Collect" not in out
        assert "Tax calculated" not in out


class TestOrders:
    def test_scenario_b_delete_404(self, run_cli, mock_api, capsys):
        mock_api.add(
            "DELETE", "/v2/transactions/orders/ORDER-123", status=404,
            json_body={"error": "Not Found", "detail": "Resource can't be found", "status": 404},
        )

        code = run_cli("orders", "delete", "ORDER-123")

        captured = capsys.readouterr()
        assert code == 1
        assert "404" in captured.err
        assert "Failed to delete order" in captured.err
        assert captured.out == ""

    def test_delete_success(self, run_cli, mock_api, capsys):
        mock_api.add("DELETE", "/v2/transactions/orders/ORDER-123", json_body={"order": ORDER})

        assert run_cli("orders", "delete", "ORDER-123") == 0
        assert "ORDER-123" in capsys.readouterr().out

    def test_delete_dot_id_targets_the_order(self, run_cli, mock_api):
        run_cli("orders", "delete", ".")

        assert mock_api.last_request.url.raw_path == b"/v2/transactions/orders/%2E"

    def test_list_passes_filters(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/transactions/orders", json_body={"orders": ["B-2", "A-1"]})

        code = run_cli("orders", "list", "--from-date", "2024-01-01", "--status", "captured")

        assert code == 0
        assert dict(mock_api.last_request.url.params) == {
            "from_transaction_date": "2024-01-01",
            "status": "captured",
        }
        out = capsys.readouterr().out
        assert out.index("B-2") < out.index("A-1")
        assert "Transaction ID" in out

    def test_empty_list_human(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/transactions/orders", json_body={"orders": []})

        assert run_cli("orders", "list") == 0
        assert "No orders found" in capsys.readouterr().out

    def test_empty_list_json(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/transactions/orders", json_body={"orders": []})

        assert run_cli("orders", "list", "--json") == 0
        assert json.loads(capsys.readouterr().out) == []

    def test_get_renders_line_items(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/transactions/orders/ORDER-123", json_body={"order": ORDER})

        assert run_cli("orders", "get", "ORDER-123") == 0
        out = capsys.readouterr().out
        assert "Order: ORDER-123" in out
        assert "New York, NY 10001 US" in out
        assert "Widget" in out
        assert "$8.88" in out

    def test_create_required_only(self, run_cli, mock_api):
        mock_api.add("POST", "/v2/transactions/orders", json_body={"order": ORDER})

        code = run_cli(
            "orders", "create",
            "--transaction-id", "ORDER-123", "--transaction-date", "2024-01-15",
            "--to-country", "US", "--to-zip", "10001", "--to-state", "NY",
            "--amount", "105", "--shipping", "5", "--sales-tax", "8.88",
        )

        assert code == 0
        assert mock_api.last_json() == {
            "transaction_id": "ORDER-123",
            "transaction_date": "2024-01-15",
            "to_country": "US",
            "to_zip": "10001",
            "to_state": "NY",
            "amount": 105,
            "shipping": 5,
            "sales_tax": 8.88,
        }

    def test_create_bad_sales_tax(self, run_cli, mock_api):
        code = run_cli(
            "orders", "create",
            "--transaction-id", "X", "--transaction-date", "2024-01-15",
            "--to-country", "US", "--to-zip", "10001", "--to-state", "NY",
            "--amount", "105", "--shipping", "5", "--sales-tax", "lots",
        )

        assert code == 1
        assert mock_api.requests == []

    def test_update_sends_only_given_fields(self, run_cli, mock_api):
        mock_api.add("PUT", "/v2/transactions/orders/ORDER-123", json_body={"order": ORDER})

        assert run_cli("orders", "update", "ORDER-123", "--shipping", "7.5") == 0
        assert mock_api.last_json() == {"transaction_id": "ORDER-123", "shipping": 7.5}


class TestRefunds:
    def test_create_passes_negative_amounts(self, run_cli, mock_api, capsys):
        mock_api.add("POST", "/v2/transactions/refunds", json_body={
            "refund": {"transaction_id": "REFUND-1", "amount": "-105.0", "sales_tax": "-8.88"},
        })

        code = run_cli("refunds", "create", *REFUND_ARGS)

        assert code == 0
        body = mock_api.last_json()
        assert body["amount"] == -105
        assert body["transaction_reference_id"] == "ORDER-123"
        assert "-$8.88" in capsys.readouterr().out

    def test_list_empty(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/transactions/refunds", json_body={"refunds": []})

        assert run_cli("refunds", "list") == 0
        assert "No refunds found" in capsys.readouterr().out

    def test_create_sends_only_given_fields(self, run_cli, mock_api):
        mock_api.add("POST", "/v2/transactions/refunds", json_body={"refund": {"transaction_id": "REFUND-1"}})

        assert run_cli("refunds", "create", *REFUND_ARGS) == 0
        assert set(mock_api.last_json()) == {
            "transaction_id", "transaction_date", "transaction_reference_id",
            "to_country", "to_zip", "to_state", "amount", "shipping", "sales_tax",
        }

    def test_non_numeric_shipping_fails_before_request(self, run_cli, mock_api, capsys):
        args = [a if a != "-5" else "five" for a in REFUND_ARGS]

        assert run_cli("refunds", "create", *args) == 1
        assert mock_api.requests == []
        assert "invalid amount" in capsys.readouterr().err


class TestListings:
    def test_scenario_c_nexus_json(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/nexus/regions", json_body={"regions": REGIONS})

        code = run_cli("nexus", "list", "--json")

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data == REGIONS
        assert [r["region_code"] for r in data] == ["NY", "CA"]

    def test_nexus_table(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/nexus/regions", json_body={"regions": REGIONS})

        assert run_cli("nexus", "list") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["Country", "Country", "Name", "State/Region", "Region", "Name"]
        assert set(lines[1].replace(" ", "")) == {"-"}
        assert "New York" in lines[2]
        assert "California" in lines[3]

    def test_categories_empty(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/categories", json_body={"categories": []})

        assert run_cli("categories", "list") == 0
        assert "No results found." in capsys.readouterr().out

    def test_summary_rates_nested_columns(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/summary_rates", json_body={"summary_rates": [{
            "country_code": "US", "country": "United States",
            "region_code": "CA", "region": "California",
            "minimum_rate": {"label": "State Tax", "rate": 0.065},
            "average_rate": {"label": "Tax", "rate": 0.0827},
        }]})

        assert run_cli("rates", "summary") == 0
        out = capsys.readouterr().out
        assert "0.065" in out
        assert "0.0827" in out

    def test_rates_get(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/rates/90002", json_body={"rate": {
            "zip": "90002", "state": "CA", "county": "LOS ANGELES", "city": "WATTS",
            "state_rate": "0.0625", "county_rate": "0.01", "city_rate": "0.0",
            "combined_district_rate": "0.025", "combined_rate": "0.0975",
            "freight_taxable": False,
        }})

        assert run_cli("rates", "get", "--zip", "90002") == 0
        assert dict(mock_api.last_request.url.params) == {"country": "US"}
        out = capsys.readouterr().out
        assert "9.7500%" in out
        assert "LOS ANGELES" in out


class TestValidate:
    def test_address_matches(self, run_cli, mock_api, capsys):
        mock_api.add("POST", "/v2/addresses/validate", json_body={"addresses": [
            {"zip": "85297-2176", "street": "3301 S Greenfield Rd", "state": "AZ", "country": "US", "city": "Gilbert"},
        ]})

        code = run_cli("validate", "address", "--country", "US", "--zip", "85297")

        assert code == 0
        assert mock_api.last_json() == {"country": "US", "zip": "85297"}
        out = capsys.readouterr().out
        assert "Match 1:" in out
        assert "3301 S Greenfield Rd" in out

    def test_vat(self, run_cli, mock_api, capsys):
        mock_api.add("GET", "/v2/validation", json_body={"validation": {
            "valid": True, "exists": True, "vies_available": True,
            "vat_number": "FR40303265045", "name": "SA SODIMAS", "country_code": "FR",
        }})

        assert run_cli("validate", "vat", "FR40303265045") == 0
        out = capsys.readouterr().out
        assert "Yes" in out
        assert "SA SODIMAS" in out


class TestErrors:
    def test_missing_credential(self, tmp_path, run_cli, mock_api, capsys):
        empty_store = ConfigStore(tmp_path / "empty" / "config.json", env=EnvSettings())

        code = run_cli("nexus", "list", store=empty_store)

        assert code == 1
        assert mock_api.requests == []
        assert "config set --api-key" in capsys.readouterr().err

    def test_env_key_used_for_auth(self, keyed_store, run_cli, mock_api, monkeypatch):
        mock_api.add("GET", "/v2/categories", json_body={"categories": []})
        monkeypatch.setenv("TAXJAR_API_KEY", "env-key-abcdefgh")
        env_store = ConfigStore(keyed_store.path, env=EnvSettings())

        run_cli("categories", "list", store=env_store)

        assert mock_api.last_request.headers["Authorization"] == "Bearer env-key-abcdefgh"

    def test_unknown_command(self, run_cli, capsys):
        assert run_cli("invoices", "list") == 1
        assert "invalid choice" in capsys.readouterr().err

    def test_no_command(self, run_cli):
        assert run_cli() == 1

    def test_version(self, run_cli, capsys):
        assert run_cli("--version") == 0
        assert "1.0.0" in capsys.readouterr().out


class TestConfigCommands:
    def test_set_and_show(self, store, run_cli, capsys):
        """`store` already holds the test key; setting a new one replaces it."""
        assert run_cli("config", "set", "--api-key", "abcd1234efgh5678", store=store) == 0
        assert store.get_credential().api_key == "abcd1234efgh5678"

        assert run_cli("config", "show", store=store) == 0
        out = capsys.readouterr().out
        assert "abcd****5678" in out
        assert "abcd1234efgh5678" not in out
        assert str(store.path) in out

    def test_set_sandbox(self, store, run_cli):
        assert run_cli("config", "set", "--sandbox", store=store) == 0
        assert store.get_base_url() == "https://api.sandbox.taxjar.com/v2"

    def test_set_requires_a_value(self, store, run_cli, capsys):
        assert run_cli("config", "set", store=store) == 1
        err = capsys.readouterr().err
        assert "usage: taxjar config set" in err
        assert "--api-key" in err
