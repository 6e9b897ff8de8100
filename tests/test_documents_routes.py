import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.core.pdf_errors import PdfGenerationError
from app.main import create_app


BIRTH_PAYLOAD = {
    "actNumber": "N-2023-001",
    "registrationDate": "2023-01-20",
    "registryOffice": "N'Djamena",
    "details": {"nom": "Doe", "prenom": "John", "sexe": "M", "dateNaissance": "2023-01-15"},
}


class HealthRoutesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_root_endpoint(self) -> None:
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_request_id_is_echoed_or_generated(self) -> None:
        echoed = self.client.get("/health", headers={"X-Request-ID": "req-42"})
        generated = self.client.get("/health", headers={"X-Request-ID": "x" * 100})

        self.assertEqual(echoed.headers["X-Request-ID"], "req-42")
        self.assertEqual(len(generated.headers["X-Request-ID"]), 32)


class DocumentRoutesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_lists_supported_types(self) -> None:
        response = self.client.get("/api/documents/types")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["types"],
            ["birth", "marriage", "death", "divorce", "cohabitation"],
        )

    def test_generates_birth_pdf(self) -> None:
        response = self.client.post("/api/documents/birth/pdf", json=BIRTH_PAYLOAD)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "application/pdf")
        self.assertEqual(
            response.headers["content-disposition"],
            'attachment; filename="acte-naissance-n-2023-001.pdf"',
        )
        self.assertTrue(response.content.startswith(b"%PDF"))

    def test_accepts_legacy_payload_keys(self) -> None:
        response = self.client.post(
            "/api/documents/Death/pdf",
            json={"numeroActe": "D-17", "mairie": {"nom": "Sarh"}, "details": {}},
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn('filename="acte-deces-d-17.pdf"', response.headers["content-disposition"])

    def test_numeric_act_number_is_coerced(self) -> None:
        response = self.client.post(
            "/api/documents/birth/pdf",
            json={"actNumber": 2023001, "details": {"nom": "Doe"}},
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn('filename="acte-naissance-2023001.pdf"', response.headers["content-disposition"])

    def test_office_object_under_english_key_is_accepted(self) -> None:
        with patch("app.api.routes.documents.generate_document", AsyncMock(return_value=b"%PDF-1.4")) as generate:
            response = self.client.post(
                "/api/documents/birth/pdf",
                json={"actNumber": "N-1", "registryOffice": {"nom": "Sarh"}},
            )

        self.assertEqual(response.status_code, 200)
        record = generate.await_args.args[1]
        self.assertEqual(record.registry_office, "Sarh")

    def test_unsupported_type_returns_400(self) -> None:
        response = self.client.post("/api/documents/adoption/pdf", json=BIRTH_PAYLOAD)

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], "DOCUMENT_TYPE_UNSUPPORTED")
        self.assertEqual(body["name"], "PdfGenerationError")
        self.assertIn("birth", body["details"]["supported"])

    def test_generation_failure_returns_500_with_correlation_id(self) -> None:
        failing = AsyncMock(side_effect=PdfGenerationError("boom"))
        monitoring = AsyncMock()

        with patch("app.api.routes.documents.generate_document", failing), patch(
            "app.api.routes.documents.send_monitoring_event", monitoring
        ):
            response = self.client.post(
                "/api/documents/birth/pdf",
                json=BIRTH_PAYLOAD,
                headers={"X-Request-ID": "req-500"},
            )

        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["code"], "PDF_GENERATION_ERROR")
        self.assertEqual(body["correlation_id"], "req-500")
        monitoring.assert_awaited_once()
        self.assertEqual(monitoring.await_args.args[0], "pdf_generation_failed")


if __name__ == "__main__":
    unittest.main()
