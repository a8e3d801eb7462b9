def test_owner_page_lists_pets_and_visits(client):
    resp = client.get("/owners/5")
    assert resp.status_code == 200
    assert resp.template.name == "owners/owner_details.html"

    ctx = resp.context
    assert ctx["owner"].id == 5
    assert [p.name for p in ctx["pets"]] == ["Leo"]
    assert [v.id for v in ctx["visits_by_pet"][3]] == [42, 99]
    assert ctx["vets"]

    assert "George Franklin" in resp.text
    assert "/owners/5/pets/3/visits/42/edit" in resp.text


def test_owner_page_links_return_only_for_returned_visits(client):
    text = client.get("/owners/5").text
    assert "/owners/5/pets/3/visits/42/return" in text
    assert "/owners/5/pets/3/visits/99/return" not in text


def test_missing_owner_is_404(client):
    resp = client.get("/owners/999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Owner not found"
