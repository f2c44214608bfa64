from app.models.saved_recipe import SavedRecipe

from tests.conftest import auth_headers


class TestSavedRecipes:

    def test_saving_twice_keeps_one_row(self, client, db, make_user, make_recipe):
        user = make_user()
        recipe = make_recipe()

        first = client.post("/api/saved-recipes", json={"recipe_id": recipe.id}, headers=auth_headers(user))
        second = client.post("/api/saved-recipes", json={"recipe_id": recipe.id}, headers=auth_headers(user))

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["id"] == second.json()["id"]
        assert db.query(SavedRecipe).filter_by(user_id=user.id, recipe_id=recipe.id).count() == 1

    def test_save_missing_recipe(self, client, make_user):
        res = client.post("/api/saved-recipes", json={"recipe_id": "missing"}, headers=auth_headers(make_user()))

        assert res.status_code == 404

    def test_save_requires_recipe_id(self, client, make_user):
        res = client.post("/api/saved-recipes", json={}, headers=auth_headers(make_user()))

        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "recipe_id"

    def test_list_and_status(self, client, make_user, make_recipe):
        user = make_user()
        saved = make_recipe(name="Saved")
        other = make_recipe(name="Other")
        client.post("/api/saved-recipes", json={"recipe_id": saved.id}, headers=auth_headers(user))

        listed = client.get("/api/saved-recipes", headers=auth_headers(user))
        status_saved = client.get(f"/api/saved-recipes/{saved.id}/status", headers=auth_headers(user))
        status_other = client.get(f"/api/saved-recipes/{other.id}/status", headers=auth_headers(user))

        assert [r["name"] for r in listed.json()] == ["Saved"]
        assert status_saved.json() == {"is_saved": True}
        assert status_other.json() == {"is_saved": False}

    def test_saved_list_is_per_user(self, client, make_user, make_recipe):
        alice = make_user()
        bob = make_user()
        recipe = make_recipe()
        client.post("/api/saved-recipes", json={"recipe_id": recipe.id}, headers=auth_headers(alice))

        assert client.get("/api/saved-recipes", headers=auth_headers(bob)).json() == []

    def test_unsave(self, client, make_user, make_recipe):
        user = make_user()
        recipe = make_recipe()
        client.post("/api/saved-recipes", json={"recipe_id": recipe.id}, headers=auth_headers(user))

        res = client.delete(f"/api/saved-recipes/{recipe.id}", headers=auth_headers(user))
        again = client.delete(f"/api/saved-recipes/{recipe.id}", headers=auth_headers(user))

        assert res.status_code == 200
        assert again.status_code == 404
        status = client.get(f"/api/saved-recipes/{recipe.id}/status", headers=auth_headers(user))
        assert status.json() == {"is_saved": False}

    def test_requires_authentication(self, client):
        assert client.get("/api/saved-recipes").status_code == 401
