"""
CRM - Entity CRUD Tests
Deals, invoices, accounts, contacts, complaints, tasks, scheduled events, calendar.
"""

import pytest

from models import compute_totals


INVOICE_PAYLOAD = {
    "companyName": "Acme",
    "customerName": "Jo",
    "productName": "Widget",
    "amount": 1000,
    "discount": 10,
    "gstRate": 18,
    "paidAmount": 62,
    "date": "2024-03-15T00:00:00",
}

ACCOUNT_PAYLOAD = {
    "accountHolderName": "Jo Smith",
    "accountNumber": "123456789",
    "bankName": "First Bank",
    "accountType": "Savings",
    "IFSCCode": "FBIN0001",
    "UpiId": "jo@upi",
}

CONTACT_PAYLOAD = {
    "companyName": "Acme",
    "customerName": "Jo Smith",
    "contactNumber": "9998887777",
    "emailAddress": "jo@acme.com",
    "address": "1 Main St",
    "gstNumber": "GST123",
}

TASK_PAYLOAD = {
    "subject": "Follow up",
    "relatedTo": "Acme",
    "name": "Call Jo",
    "assigned": "Sam",
}


class TestDeals:
    """Deals share the lead schema"""

    def test_deal_lifecycle(self, client, lead_payload):
        response = client.post("/api/v1/deal", json=lead_payload)
        assert response.status_code == 201
        deal_id = response.json()["data"]["id"]

        response = client.post("/api/v1/deal/status", json={"dealId": deal_id, "status": "Decided"})
        assert response.json()["data"]["status"] == "Decided"

        response = client.get("/api/v1/deal/by-year", params={"year": 2024})
        assert response.json()["count"] == 1

        assert client.delete(f"/api/v1/deal/{deal_id}").status_code == 200
        assert client.get(f"/api/v1/deal/{deal_id}").json() == {"detail": "Deal not found"}

    def test_deals_and_leads_are_separate(self, client, lead_payload):
        client.post("/api/v1/deal", json=lead_payload)
        assert client.get("/api/v1/lead").json()["count"] == 0
        assert client.get("/api/v1/deal").json()["count"] == 1


class TestInvoices:
    """Invoices: computed totals, paid / unpaid lists"""

    def test_compute_totals(self):
        totals = compute_totals(1000, discount=10, gst_rate=18, paid_amount=62)
        assert totals == {"totalWithoutGst": 900.0, "totalWithGst": 1062.0, "remainingAmount": 1000.0}

    def test_create_fills_missing_totals(self, client):
        response = client.post("/api/v1/invoice", json=INVOICE_PAYLOAD)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["totalWithoutGst"] == 900
        assert data["totalWithGst"] == 1062
        assert data["remainingAmount"] == 1000
        assert data["status"] == "Pending"

    def test_client_totals_are_kept(self, client):
        response = client.post("/api/v1/invoice", json={**INVOICE_PAYLOAD, "totalWithGst": 1234.5})
        data = response.json()["data"]
        assert data["totalWithGst"] == 1234.5
        assert data["totalWithoutGst"] == 900

    def test_invalid_status_rejected(self, client):
        response = client.post("/api/v1/invoice", json={**INVOICE_PAYLOAD, "status": "Overdue"})
        assert response.status_code == 422

    def test_paid_and_unpaid(self, client):
        client.post("/api/v1/invoice", json={**INVOICE_PAYLOAD, "status": "Paid"})
        client.post("/api/v1/invoice", json={**INVOICE_PAYLOAD, "status": "Unpaid"})
        client.post("/api/v1/invoice", json={**INVOICE_PAYLOAD, "status": "Unpaid"})

        assert client.get("/api/v1/invoice/paid").json()["count"] == 1
        assert client.get("/api/v1/invoice/unpaid").json()["count"] == 2
        assert client.get("/api/v1/invoice").json()["count"] == 3

    def test_status_move(self, client):
        invoice_id = client.post("/api/v1/invoice", json=INVOICE_PAYLOAD).json()["data"]["id"]
        response = client.post("/api/v1/invoice/status", json={"invoiceId": invoice_id, "status": "Paid"})
        assert response.status_code == 200
        assert client.get("/api/v1/invoice/paid").json()["data"][0]["id"] == invoice_id


class TestAccounts:

    def test_account_uses_exact_bank_field_names(self, client):
        response = client.post("/api/v1/account", json=ACCOUNT_PAYLOAD)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["IFSCCode"] == "FBIN0001"
        assert data["UpiId"] == "jo@upi"

    def test_short_fields_rejected(self, client):
        response = client.post("/api/v1/account", json={**ACCOUNT_PAYLOAD, "bankName": "B"})
        assert response.status_code == 422

    def test_update(self, client):
        account_id = client.post("/api/v1/account", json=ACCOUNT_PAYLOAD).json()["data"]["id"]
        response = client.put(f"/api/v1/account/{account_id}", json={"accountType": "Current"})
        assert response.json()["data"]["accountType"] == "Current"


class TestContacts:

    def test_create_and_list(self, client):
        assert client.post("/api/v1/contact", json=CONTACT_PAYLOAD).status_code == 201
        assert client.get("/api/v1/contact").json()["count"] == 1

    def test_send_email(self, client, sent_emails):
        contact_id = client.post("/api/v1/contact", json=CONTACT_PAYLOAD).json()["data"]["id"]
        response = client.post(
            f"/api/v1/contact/{contact_id}/email",
            data={"subject": "Your quote", "message": "Please find the quote attached."},
        )
        assert response.status_code == 200
        assert len(sent_emails) == 1
        assert sent_emails[0]["to"] == "jo@acme.com"
        assert sent_emails[0]["subject"] == "Your quote"
        assert "Jo Smith" in sent_emails[0]["html"]

    def test_send_email_default_subject(self, client, sent_emails):
        contact_id = client.post("/api/v1/contact", json=CONTACT_PAYLOAD).json()["data"]["id"]
        client.post(f"/api/v1/contact/{contact_id}/email", data={"message": "Hello"})
        assert sent_emails[0]["subject"] == "(No Subject)"

    def test_send_email_unknown_contact(self, client, sent_emails):
        response = client.post("/api/v1/contact/nope/email", data={"message": "Hello"})
        assert response.status_code == 404
        assert sent_emails == []

    def test_send_email_failure_returns_502(self, client, monkeypatch):
        from email_service import EmailService
        monkeypatch.setattr(EmailService, "_send_email", lambda self, *args: False)
        contact_id = client.post("/api/v1/contact", json=CONTACT_PAYLOAD).json()["data"]["id"]
        response = client.post(f"/api/v1/contact/{contact_id}/email", data={"message": "Hello"})
        assert response.status_code == 502


class TestComplaints:

    def test_defaults(self, client):
        response = client.post("/api/v1/complaint", json={"complainerName": "Jo", "subject": "Late delivery"})
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["caseStatus"] == "Pending"
        assert data["priority"] == "Medium"

    def test_missing_subject(self, client):
        response = client.post("/api/v1/complaint", json={"complainerName": "Jo"})
        assert response.status_code == 422


class TestTasks:

    def test_create_and_board(self, client):
        task_id = client.post("/api/v1/task", json=TASK_PAYLOAD).json()["data"]["id"]
        client.post("/api/v1/task/status", json={"taskId": task_id, "status": "In Progress"})

        board = {c["status"]: c["items"] for c in client.get("/api/v1/task/board").json()["data"]}
        assert [t["id"] for t in board["In Progress"]] == [task_id]
        assert board["Pending"] == []

    def test_invalid_priority(self, client):
        response = client.post("/api/v1/task", json={**TASK_PAYLOAD, "priority": "Urgent"})
        assert response.status_code == 422


class TestScheduledEvents:

    @pytest.mark.parametrize("event_type", ["Call", "call", "Follow-Up", "meeting"])
    def test_event_type_case_variants(self, client, event_type):
        response = client.post("/api/v1/scheduledEvents", data={
            "subject": "Demo call",
            "eventType": event_type,
            "recurrence": "one-time",
            "status": "Scheduled",
            "priority": "high",
        })
        assert response.status_code == 201
        assert response.json()["data"]["eventType"] == event_type

    def test_missing_recurrence(self, client):
        response = client.post("/api/v1/scheduledEvents", data={
            "subject": "Demo call",
            "eventType": "Call",
            "status": "Scheduled",
            "priority": "High",
        })
        assert response.status_code == 422


class TestCalendar:

    def test_create_update_delete(self, client):
        response = client.post("/api/v1/calendar", json={
            "event": "Quarterly review",
            "date": "2024-06-01T09:00:00",
            "calendarId": 2,
        })
        assert response.status_code == 201
        event_id = response.json()["data"]["id"]
        assert response.json()["data"]["title"] is None

        response = client.put(f"/api/v1/calendar/{event_id}", json={"title": "Q2"})
        assert response.json()["data"]["title"] == "Q2"

        assert client.delete(f"/api/v1/calendar/{event_id}").status_code == 200
        assert client.get(f"/api/v1/calendar/{event_id}").json()["detail"] == "Event not found"


SCHEDULED_FORM = {
    "subject": "Demo call",
    "eventType": "Call",
    "recurrence": "Weekly",
    "status": "Scheduled",
    "priority": "High",
}


class TestScheduledAttachments:
    """Multipart create with up to 5 attachments"""

    def test_attachments_stored(self, client, upload_dir):
        response = client.post(
            "/api/v1/scheduledEvents",
            data=SCHEDULED_FORM,
            files=[
                ("attachments", ("agenda.txt", b"agenda", "text/plain")),
                ("attachments", ("deck.pdf", b"%PDF", "application/pdf")),
            ],
        )
        assert response.status_code == 201
        attachments = response.json()["data"]["attachments"]
        assert [a["originalName"] for a in attachments] == ["agenda.txt", "deck.pdf"]
        assert (upload_dir / attachments[0]["storedName"]).read_bytes() == b"agenda"

    def test_without_attachments(self, client):
        response = client.post("/api/v1/scheduledEvents", data=SCHEDULED_FORM)
        assert response.json()["data"]["attachments"] == []

    def test_more_than_five_rejected(self, client, upload_dir):
        files = [("attachments", (f"f{i}.txt", b"x", "text/plain")) for i in range(6)]
        response = client.post("/api/v1/scheduledEvents", data=SCHEDULED_FORM, files=files)
        assert response.status_code == 400
        assert list(upload_dir.iterdir()) == []
        assert client.get("/api/v1/scheduledEvents").json()["count"] == 0

    def test_invalid_enum_stores_nothing(self, client, upload_dir):
        response = client.post(
            "/api/v1/scheduledEvents",
            data={**SCHEDULED_FORM, "recurrence": "Hourly"},
            files=[("attachments", ("agenda.txt", b"agenda", "text/plain"))],
        )
        assert response.status_code == 422
        assert list(upload_dir.iterdir()) == []

    def test_delete_removes_attachments(self, client, upload_dir):
        data = client.post(
            "/api/v1/scheduledEvents",
            data=SCHEDULED_FORM,
            files=[("attachments", ("agenda.txt", b"agenda", "text/plain"))],
        ).json()["data"]
        assert client.delete(f"/api/v1/scheduledEvents/{data['id']}").status_code == 200
        assert not (upload_dir / data["attachments"][0]["storedName"]).exists()


class TestContactEmailAttachments:

    def test_attachments_forwarded(self, client, sent_emails, upload_dir):
        contact_id = client.post("/api/v1/contact", json=CONTACT_PAYLOAD).json()["data"]["id"]
        response = client.post(
            f"/api/v1/contact/{contact_id}/email",
            data={"subject": "Your quote", "message": "Attached."},
            files=[
                ("attachments", ("quote.pdf", b"%PDF-quote", "application/pdf")),
                ("attachments", ("terms.txt", b"terms", "text/plain")),
            ],
        )
        assert response.status_code == 200
        assert response.json()["attachments"] == 2
        assert sent_emails[0]["attachments"] == [
            ("quote.pdf", b"%PDF-quote", "application/pdf"),
            ("terms.txt", b"terms", "text/plain"),
        ]
        assert list(upload_dir.iterdir()) == []

    def test_oversized_attachment(self, client, sent_emails, monkeypatch):
        from services import storage
        monkeypatch.setattr(storage, "MAX_UPLOAD_SIZE", 4)
        contact_id = client.post("/api/v1/contact", json=CONTACT_PAYLOAD).json()["data"]["id"]
        response = client.post(
            f"/api/v1/contact/{contact_id}/email",
            data={"message": "Attached."},
            files=[("attachments", ("big.txt", b"12345", "text/plain"))],
        )
        assert response.status_code == 400
        assert sent_emails == []


class TestClearingFields:
    """PUT with null clears optional fields only"""

    def test_optional_field_cleared(self, client):
        event_id = client.post("/api/v1/calendar", json={
            "event": "Review", "date": "2024-06-01T09:00:00", "calendarId": 1, "title": "Q2",
        }).json()["data"]["id"]

        response = client.put(f"/api/v1/calendar/{event_id}", json={"title": None})
        assert response.status_code == 200
        assert response.json()["data"]["title"] is None
        assert client.get(f"/api/v1/calendar/{event_id}").json()["data"]["title"] is None

    def test_invoice_end_date_cleared(self, client):
        invoice_id = client.post(
            "/api/v1/invoice", json={**INVOICE_PAYLOAD, "endDate": "2024-04-15T00:00:00"}
        ).json()["data"]["id"]
        response = client.put(f"/api/v1/invoice/{invoice_id}", json={"endDate": None})
        assert response.json()["data"]["endDate"] is None

    def test_required_field_cannot_be_nulled(self, client, lead_payload):
        lead_id = client.post("/api/v1/lead", json=lead_payload).json()["data"]["id"]
        for field in ["companyName", "status", "endDate"]:
            response = client.put(f"/api/v1/lead/{lead_id}", json={field: None})
            assert response.status_code == 422, field
        assert client.get(f"/api/v1/lead/{lead_id}").json()["data"]["companyName"] == "Acme"
