import itertools

import pytest

from prompts.models import Prompt


def _active_count():
    return Prompt.objects.filter(is_active=True).count()


@pytest.mark.django_db
@pytest.mark.parametrize("prior_active", [0, 1, 3])
def test_creating_active_prompt_leaves_exactly_one_active(auth_client, prior_active):
    for i in range(prior_active):
        Prompt.objects.create(name=f"old {i}", content="x", is_active=True)
    Prompt.objects.create(name="inactive", content="x")

    resp = auth_client.post(
        "/api/prompts/", {"name": "new", "content": "Be brief.", "is_active": True}, content_type="application/json"
    )

    assert resp.status_code == 201
    assert _active_count() == 1
    assert Prompt.objects.active().name == "new"


@pytest.mark.django_db
def test_update_and_activate_keep_single_active(auth_client):
    a, b, c = (Prompt.objects.create(name=n, content="x") for n in "abc")
    for prompt, via_action in itertools.product((a, b, c), (True, False)):
        if via_action:
            resp = auth_client.post(f"/api/prompts/{prompt.pk}/activate/")
        else:
            resp = auth_client.patch(
                f"/api/prompts/{prompt.pk}/", {"is_active": True}, content_type="application/json"
            )
        assert resp.status_code == 200
        assert _active_count() == 1
        assert Prompt.objects.active().pk == prompt.pk


@pytest.mark.django_db
def test_name_and_content_required(auth_client):
    resp = auth_client.post("/api/prompts/", {"name": "only name"}, content_type="application/json")
    assert resp.status_code == 400
    assert resp.json()["content"] == ["Name and content are required"]


@pytest.mark.django_db
def test_active_prompt_cannot_be_deleted(auth_client):
    active = Prompt.objects.create(name="live", content="x", is_active=True)
    spare = Prompt.objects.create(name="spare", content="x")

    assert auth_client.delete(f"/api/prompts/{active.pk}/").status_code == 400
    assert auth_client.delete(f"/api/prompts/{spare.pk}/").status_code == 204
    assert Prompt.objects.filter(pk=active.pk).exists()
