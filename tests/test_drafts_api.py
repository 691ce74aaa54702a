def test_draft_flow(client):
    created = client.post("/api/drafts", json={"profession": "lawyer", "userName": "Arjun Mehta"})
    assert created.status_code == 201
    draft_id = created.json()["id"]
    assert created.json()["profession"] == "lawyer"

    patched = client.patch(
        f"/api/drafts/{draft_id}",
        json={"templateId": "midnight-classic", "material": "wood", "personalization": {"title": "Advocate"}},
    ).json()
    assert patched["material"] == "wood"
    assert patched["prefill"]["price"] == 799
    assert patched["prefill"]["line1Text"] == "ARJUN MEHTA"
    assert patched["prefill"]["line2Text"] == "Advocate"

    assert client.get(f"/api/drafts/{draft_id}").json()["templateId"] == "midnight-classic"

    assert client.delete(f"/api/drafts/{draft_id}").status_code == 200
    assert client.get(f"/api/drafts/{draft_id}").status_code == 404
    assert client.delete(f"/api/drafts/{draft_id}").status_code == 404


def test_draft_validation(client):
    assert client.post("/api/drafts", json={"profession": "astronaut"}).status_code == 422

    draft_id = client.post("/api/drafts", json={"profession": "student"}).json()["id"]
    assert client.patch(f"/api/drafts/{draft_id}", json={"material": "gold"}).status_code == 422
    assert client.patch("/api/drafts/missing", json={"templateId": "x"}).status_code == 404
