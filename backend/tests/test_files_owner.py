"""
CRM - Upload Tests
Files / folders and the owner profile with logo.
"""

from services import storage


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class TestFiles:

    def test_upload_file(self, client, upload_dir):
        response = client.post(
            "/api/v1/files/upload",
            files={"file": ("report.pdf", b"%PDF-1.4 data", "application/pdf")},
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "report.pdf"
        assert data["type"] == "file"
        assert data["fileType"] == "application"
        assert data["storedName"].endswith("report.pdf")
        assert data["fileUrl"] == f"/uploads/{data['storedName']}"
        assert (upload_dir / data["storedName"]).read_bytes() == b"%PDF-1.4 data"

    def test_upload_without_file(self, client):
        response = client.post("/api/v1/files/upload", data={"name": "empty"})
        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded"

    def test_upload_too_large(self, client, monkeypatch, upload_dir):
        monkeypatch.setattr(storage, "MAX_UPLOAD_SIZE", 10)
        response = client.post(
            "/api/v1/files/upload",
            files={"file": ("big.txt", b"x" * 11, "text/plain")},
        )
        assert response.status_code == 400
        assert list(upload_dir.iterdir()) == []

    def test_folder_contents_and_filters(self, client):
        folder_id = client.post("/api/v1/files/folder", json={"name": "Quotes"}).json()["data"]["id"]
        client.post(
            "/api/v1/files/upload",
            files={"file": ("q1.txt", b"q1", "text/plain")},
            data={"parentId": folder_id},
        )
        client.post("/api/v1/files/upload", files={"file": ("loose.txt", b"x", "text/plain")})

        assert client.get("/api/v1/files", params={"type": "folder"}).json()["count"] == 1
        assert client.get("/api/v1/files", params={"type": "file"}).json()["count"] == 2
        inside = client.get("/api/v1/files", params={"parentId": folder_id}).json()["data"]
        assert [f["name"] for f in inside] == ["q1.txt"]

    def test_upload_into_unknown_folder(self, client):
        response = client.post(
            "/api/v1/files/upload",
            files={"file": ("q1.txt", b"q1", "text/plain")},
            data={"parentId": "nope"},
        )
        assert response.status_code == 400

    def test_delete_non_empty_folder_refused(self, client):
        folder_id = client.post("/api/v1/files/folder", json={"name": "Quotes"}).json()["data"]["id"]
        file_id = client.post(
            "/api/v1/files/upload",
            files={"file": ("q1.txt", b"q1", "text/plain")},
            data={"parentId": folder_id},
        ).json()["data"]["id"]

        assert client.delete(f"/api/v1/files/{folder_id}").status_code == 400
        assert client.delete(f"/api/v1/files/{file_id}").status_code == 200
        assert client.delete(f"/api/v1/files/{folder_id}").status_code == 200

    def test_delete_file_removes_stored_copy(self, client, upload_dir):
        data = client.post(
            "/api/v1/files/upload",
            files={"file": ("a.txt", b"a", "text/plain")},
        ).json()["data"]
        client.delete(f"/api/v1/files/{data['id']}")
        assert not (upload_dir / data["storedName"]).exists()
        assert client.get(f"/api/v1/files/{data['id']}").status_code == 404


OWNER_FORM = {
    "companyName": "Acme Ltd",
    "ownerName": "Jo Smith",
    "contactNumber": "9998887777",
    "emailAddress": "billing@acme.com",
    "gstNumber": "GST123",
    "website": "https://acme.example",
}


class TestOwner:

    def test_create_with_logo_and_invoice_header(self, client, upload_dir):
        response = client.post(
            "/api/v1/owner",
            data=OWNER_FORM,
            files={"logo": ("logo.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 201
        owner = response.json()["data"]
        assert owner["logo"].startswith("/uploads/")

        header = client.get("/api/v1/owner/invoice-header").json()["data"]
        assert header == {
            "companyName": "Acme Ltd",
            "contactNumber": "9998887777",
            "emailAddress": "billing@acme.com",
            "gstNumber": "GST123",
            "website": "https://acme.example",
            "logo": owner["logo"],
        }

    def test_invoice_header_without_owner(self, client):
        assert client.get("/api/v1/owner/invoice-header").status_code == 404

    def test_count(self, client):
        assert client.get("/api/v1/owner/count").json() == {"count": 0}
        client.post("/api/v1/owner", data=OWNER_FORM)
        assert client.get("/api/v1/owner/count").json() == {"count": 1}

    def test_missing_owner_name(self, client):
        form = {k: v for k, v in OWNER_FORM.items() if k != "ownerName"}
        assert client.post("/api/v1/owner", data=form).status_code == 422

    def test_invalid_email(self, client):
        response = client.post("/api/v1/owner", data={**OWNER_FORM, "emailAddress": "nope"})
        assert response.status_code == 422

    def test_logo_must_be_image(self, client, upload_dir):
        response = client.post(
            "/api/v1/owner",
            data=OWNER_FORM,
            files={"logo": ("logo.txt", b"text", "text/plain")},
        )
        assert response.status_code == 400
        assert list(upload_dir.iterdir()) == []

    def test_update_keeps_unsent_fields(self, client):
        owner_id = client.post("/api/v1/owner", data=OWNER_FORM).json()["data"]["id"]
        response = client.put(f"/api/v1/owner/{owner_id}", data={"website": "https://new.example"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["website"] == "https://new.example"
        assert data["companyName"] == "Acme Ltd"

    def test_update_replaces_logo(self, client, upload_dir):
        first = client.post(
            "/api/v1/owner",
            data=OWNER_FORM,
            files={"logo": ("old.png", PNG_BYTES, "image/png")},
        ).json()["data"]
        response = client.put(
            f"/api/v1/owner/{first['id']}",
            files={"logo": ("new.png", PNG_BYTES, "image/png")},
        )
        data = response.json()["data"]
        assert data["logoStoredName"].endswith("new.png")
        assert not (upload_dir / first["logoStoredName"]).exists()

    def test_delete(self, client):
        owner_id = client.post("/api/v1/owner", data=OWNER_FORM).json()["data"]["id"]
        assert client.delete(f"/api/v1/owner/{owner_id}").status_code == 200
        assert client.get(f"/api/v1/owner/{owner_id}").status_code == 404
        assert client.put(f"/api/v1/owner/{owner_id}", data={"website": "x"}).status_code == 404
