"""
Tests d'intégration des vues d'audit, des données de référence et du tableau de bord.
"""

import pytest


pytestmark = pytest.mark.integration


class TestReference:

    def test_get_reference(self, client, reader_headers):
        response = client.get("/api/v1/reference/", headers=reader_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["loaded"] is True
        assert body["error"] is None
        assert body["contacts_count"] == 4
        assert [c["idcontact"] for c in body["percepteurs"]] == [3]
        assert len(body["cotisants"]) == 2
        assert len(body["months"]) == 12
        assert body["months"][0] == {"value": 1, "label": "Janvier"}
        assert body["types_operation"]["13"] == "Arrêté de compte"
        assert body["moyens_paiement"]["2"] == "Chèque"

    def test_failure_reported_without_error_status(self, client, reader_headers, fake_api):
        fake_api.failures["contacts"] = 500

        response = client.get("/api/v1/reference/", headers=reader_headers)

        assert response.status_code == 200
        assert response.json()["percepteurs"] == []
        assert "500" in response.json()["error"]

    def test_zero_date_contact_still_listed(self, client, reader_headers, fake_api):
        fake_api.data["contacts"][0]["dateadhesion"] = "0000-00-00"

        response = client.get("/api/v1/reference/", headers=reader_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["error"] is None
        cotisants = {c["idcontact"]: c for c in body["cotisants"]}
        assert cotisants[1]["dateadhesion"] is None

    def test_invalid_rows_reported_without_error_status(self, client, reader_headers, fake_api):
        fake_api.data["comptesbancaires"][0]["idcompte"] = "abc"

        response = client.get("/api/v1/reference/", headers=reader_headers)

        assert response.status_code == 200
        assert response.json()["bank_accounts"] == []
        assert response.json()["error"] is not None

    def test_reload(self, client, reader_headers, fake_api):
        client.get("/api/v1/reference/", headers=reader_headers)
        client.post("/api/v1/reference/reload", headers=reader_headers)
        assert len(fake_api.calls("GET", "contacts")) == 2


class TestAuditGroups:

    def test_group_by_month_english(self, client, reader_headers):
        response = client.get("/api/v1/audit/groups?group_by=month&locale=en", headers=reader_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total_operations"] == 3
        groups = {g["key"]: g for g in body["groups"]}
        assert set(groups) == {"January 2024", "February 2024"}
        assert float(groups["January 2024"]["total_credit"]) == 150
        assert float(groups["February 2024"]["total_debit"]) == 30

    def test_nested_groups(self, client, reader_headers):
        response = client.get(
            "/api/v1/audit/groups?group_by=bank_account&group_by=contact",
            headers=reader_headers,
        )
        groups = {g["key"]: g for g in response.json()["groups"]}
        assert set(groups) == {"Compte courant", "Livret école"}
        assert {c["key"] for c in groups["Compte courant"]["children"]} == {"Amina Diallo", "Karim Benali"}
        assert [c["key"] for c in groups["Livret école"]["children"]] == ["Sans adhérent"]

    def test_no_levels(self, client, reader_headers):
        body = client.get("/api/v1/audit/groups", headers=reader_headers).json()
        assert body["groups"] == []
        assert body["total_operations"] == 3

    def test_invalid_level(self, client, reader_headers):
        response = client.get("/api/v1/audit/groups?group_by=semaine", headers=reader_headers)
        assert response.status_code == 422

    def test_filters_forwarded(self, client, reader_headers, fake_api):
        client.get("/api/v1/audit/groups?group_by=type&anneecotisation=2024", headers=reader_headers)
        assert fake_api.calls("GET", "operations")[-1].url.params["anneecotisation"] == "2024"


class TestAuditStatsAndReport:

    def test_stats(self, client, reader_headers):
        response = client.get("/api/v1/audit/stats?group_by=type", headers=reader_headers)
        assert response.status_code == 200
        rows = {r["group_values"]["type"]: r for r in response.json()}
        assert set(rows) == {"Cotisation adhérent", "Don", "Achat"}
        assert float(rows["Achat"]["balance"]) == -30

    def test_report_pdf(self, client, reader_headers):
        response = client.get("/api/v1/audit/report?group_by=month", headers=reader_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "attachment" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_report_selection(self, client, reader_headers):
        response = client.get("/api/v1/audit/report?ids=1&ids=3", headers=reader_headers)
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    def test_unreadable_amount_counts_as_zero(self, client, reader_headers, fake_api):
        fake_api.data["operations"][0]["credit"] = "N/A"

        response = client.get("/api/v1/audit/groups?group_by=month&locale=en", headers=reader_headers)
        assert response.status_code == 200
        groups = {g["key"]: g for g in response.json()["groups"]}
        assert float(groups["January 2024"]["total_credit"]) == 50

        stats = client.get("/api/v1/audit/stats", headers=reader_headers).json()
        assert float(stats[0]["total_credit"]) == 50

        report = client.get("/api/v1/audit/report", headers=reader_headers)
        assert report.status_code == 200

    def test_undated_operation_grouped_apart(self, client, reader_headers, fake_api):
        fake_api.data["operations"][2]["dateoperation"] = "0000-00-00"

        response = client.get("/api/v1/audit/groups?group_by=month", headers=reader_headers)

        assert response.status_code == 200
        assert {g["key"] for g in response.json()["groups"]} == {"janvier 2024", "Sans date"}

    def test_report_requires_token(self, client, db_session):
        assert client.get("/api/v1/audit/report").status_code == 401


class TestDashboard:

    def test_dashboard(self, client, reader_headers):
        response = client.get("/api/v1/dashboard/", headers=reader_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total_contacts"] == 4
        assert body["total_adherents"] == 2
        assert body["total_cotisations"] == 3
        assert float(body["montant_operations"]) == 150
        assert [a["idliste"] for a in body["recent_cotisations"]] == [3, 1, 2]

    def test_malformed_rows_do_not_fail(self, client, reader_headers, fake_api):
        fake_api.data["operations"][1]["credit"] = "N/A"
        fake_api.data["contacts"][3]["dateadhesion"] = "0000-00-00"

        response = client.get("/api/v1/dashboard/", headers=reader_headers)

        assert response.status_code == 200
        assert float(response.json()["montant_operations"]) == 100
        assert response.json()["total_contacts"] == 4


class TestSystem:

    def test_health(self, client, db_session):
        body = client.get("/health").json()
        assert body["database"] == "ok"
        assert body["status"] == "ok"

    def test_root(self, client):
        body = client.get("/").json()
        assert body["api"] == "/api/v1"
