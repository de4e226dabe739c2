from tests.conftest import jpeg_bytes, pdf_bytes

MB = 1024 * 1024


def create_event(client, files=None, **fields):
    data = {
        "title": "Open day",
        "description": "Visit the farm",
        "date": "2030-05-01T10:00:00",
        "location": "Nairobi",
    }
    data.update(fields)
    return client.post("/api/events/", data=data, files=files)


def test_create_event_with_cover_image(client, uploader):
    response = create_event(client, files={"image": ("cover.jpg", jpeg_bytes(1024), "image/jpeg")})

    assert response.status_code == 201
    event = response.json()
    assert event["file_type"] == "image"
    assert event["image_url"].startswith("https://res.cloudinary.com/")
    assert uploader.uploads[0]["options"]["folder"] == "ganu/events"


def test_events_are_ordered_by_date(client):
    create_event(client, title="Later", date="2031-01-01T00:00:00")
    create_event(client, title="Sooner", date="2030-01-01T00:00:00")

    titles = [e["title"] for e in client.get("/api/events/").json()]

    assert titles == ["Sooner", "Later"]


def test_event_rejects_pdf(client, uploader):
    response = create_event(client, files={"image": ("flyer.pdf", pdf_bytes(1024), "application/pdf")})

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed!"
    assert client.get("/api/events/").json() == []


def test_event_image_limit_is_five_megabytes(client):
    response = create_event(client, files={"image": ("big.jpg", jpeg_bytes(6 * MB), "image/jpeg")})

    assert response.status_code == 400
    assert response.json()["detail"] == "File too large. Maximum size is 5MB."


def test_missing_required_fields(client):
    response = client.post("/api/events/", data={"title": "Only a title"})
    assert response.status_code == 400


def test_replace_and_remove_image(client, uploader):
    event = create_event(client, files={"image": ("a.jpg", jpeg_bytes(1024), "image/jpeg")}).json()

    replaced = client.put(
        f"/api/events/{event['id']}",
        files={"image": ("b.jpg", jpeg_bytes(1024), "image/jpeg")},
    ).json()
    assert replaced["image_url"] != event["image_url"]
    assert len(uploader.destroyed) == 1

    cleared = client.put(f"/api/events/{event['id']}", data={"remove_image": "true"}).json()
    assert cleared["image_url"] is None
    assert cleared["file_type"] is None
    assert len(uploader.destroyed) == 2


def test_delete_event_removes_image(client, uploader):
    event = create_event(client, files={"image": ("a.jpg", jpeg_bytes(1024), "image/jpeg")}).json()

    response = client.delete(f"/api/events/{event['id']}")

    assert response.status_code == 200
    assert len(uploader.destroyed) == 1
    assert client.get(f"/api/events/{event['id']}").status_code == 404
