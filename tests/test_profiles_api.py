from database.models import CustomerStatus


def test_customer_reads_own_profile(client, customer, customer_headers):
    response = client.get("/api/customer/profile", headers=customer_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["email"] == "jane@example.com"
    assert body["customer"]["slug"] == customer.slug
    assert body["customer"]["profileUrl"].endswith(f"/p/{customer.slug}")


def test_agent_has_no_customer_profile(client, agent_headers):
    assert client.get("/api/customer/profile", headers=agent_headers).status_code == 404


def test_patch_profile_updates_only_given_fields(client, customer, customer_headers):
    response = client.patch(
        "/api/customer/profile",
        json={
            "fullName": "Jane Q Doe",
            "phone": "+91 91234 56780",
            "jobTitle": "Product Lead",
            "profession": "realtor",
            "customLinks": [{"title": "Portfolio", "url": "https://jane.example"}],
        },
        headers=customer_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["fullName"] == "Jane Q Doe"
    assert body["profile"]["phone"] == "919123456780"
    assert body["customer"]["jobTitle"] == "Product Lead"
    assert body["customer"]["customLinks"] == [{"title": "Portfolio", "url": "https://jane.example"}]

    cleared = client.patch("/api/customer/profile", json={"jobTitle": "  "}, headers=customer_headers).json()
    assert cleared["customer"]["jobTitle"] is None
    assert cleared["customer"]["profession"] == "realtor"


def test_patch_profile_validation(client, customer_headers):
    assert client.patch("/api/customer/profile", json={"profession": "astronaut"}, headers=customer_headers).status_code == 422
    assert client.patch("/api/customer/profile", json={"accentColor": "blue"}, headers=customer_headers).status_code == 422


def test_public_profile_page(client, db_session, customer):
    customer.profession = "doctor"
    customer.whatsapp = "9123456780"
    customer.job_title = "Cardiologist"
    db_session.commit()

    response = client.get(f"/p/{customer.slug}")

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["fullName"] == "Jane Doe"
    assert body["profile"]["jobTitle"] == "Cardiologist"
    assert body["theme"]["name"] == "Forest"
    assert body["actions"]["whatsapp"] == "https://wa.me/9123456780?text=Hi%20Jane!"
    assert body["actions"]["call"] == "tel:9123456780"


def test_public_profile_custom_accent(client, db_session, customer):
    customer.theme_preset = "custom"
    customer.accent_color = "#ff0066"
    db_session.commit()

    theme = client.get(f"/p/{customer.slug}").json()["theme"]
    assert theme["accent"] == "#ff0066"


def test_suspended_or_unknown_profile_is_hidden(client, db_session, customer):
    assert client.get("/p/nobody-0000").status_code == 404

    customer.status = CustomerStatus.SUSPENDED
    db_session.commit()
    assert client.get(f"/p/{customer.slug}").status_code == 404


def test_vcard_download(client, customer):
    response = client.get(f"/p/{customer.slug}/vcard")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/vcard")
    assert response.headers["content-disposition"] == 'attachment; filename="Jane_Doe.vcf"'
    lines = response.text.split("\n")
    assert "FN:Jane Doe" in lines
    assert "EMAIL:jane@example.com" in lines
    assert "TEL;TYPE=CELL:9123456780" in lines
