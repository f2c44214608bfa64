from app.models.review import Review

from tests.conftest import auth_headers


class TestCreateReview:

    def test_create_review(self, client, make_user, make_recipe):
        user = make_user()
        recipe = make_recipe()

        res = client.post(
            f"/api/recipes/{recipe.id}/reviews",
            json={"rating": 5, "comment": "Great!"},
            headers=auth_headers(user),
        )

        assert res.status_code == 201
        data = res.json()
        assert data["rating"] == 5
        assert data["user_id"] == user.id
        assert data["recipe_id"] == recipe.id
        assert data["is_approved"] is True

    def test_rating_bounds(self, client, make_user, make_recipe):
        """0 and 6 are rejected with the rating field listed; 1 and 5 are accepted."""
        user = make_user()
        recipe = make_recipe()
        url = f"/api/recipes/{recipe.id}/reviews"

        for rating in (0, 6):
            res = client.post(url, json={"rating": rating}, headers=auth_headers(user))
            assert res.status_code == 400
            assert "rating" in [e["field"] for e in res.json()["errors"]]

        for rating in (1, 5):
            res = client.post(url, json={"rating": rating}, headers=auth_headers(user))
            assert res.status_code == 201

    def test_non_integer_rating_is_rejected(self, client, make_user, make_recipe):
        recipe = make_recipe()

        res = client.post(
            f"/api/recipes/{recipe.id}/reviews",
            json={"rating": "5"},
            headers=auth_headers(make_user()),
        )

        assert res.status_code == 400

    def test_review_on_missing_recipe(self, client, make_user):
        res = client.post("/api/recipes/missing/reviews", json={"rating": 3}, headers=auth_headers(make_user()))

        assert res.status_code == 404

    def test_requires_authentication(self, client, make_recipe):
        res = client.post(f"/api/recipes/{make_recipe().id}/reviews", json={"rating": 3})

        assert res.status_code == 401

    def test_list_reviews_hides_unapproved(self, client, make_user, make_recipe, make_review):
        recipe = make_recipe()
        make_review(recipe, make_user(), rating=4)
        make_review(recipe, make_user(), rating=2, is_approved=False)

        res = client.get(f"/api/recipes/{recipe.id}/reviews")

        assert res.status_code == 200
        assert [r["rating"] for r in res.json()] == [4]


    def test_reviews_are_newest_first(self, client, make_user, make_recipe):
        recipe = make_recipe()
        reviewer = make_user()
        for i in range(10):
            client.post(f"/api/recipes/{recipe.id}/reviews", json={"rating": 4, "comment": f"c{i}"},
                        headers=auth_headers(reviewer))

        detail = client.get(f"/api/recipes/{recipe.id}").json()
        listed = client.get(f"/api/recipes/{recipe.id}/reviews").json()

        expected = [f"c{i}" for i in reversed(range(10))]
        assert [r["comment"] for r in detail["reviews"]] == expected
        assert [r["comment"] for r in listed] == expected


class TestUpdateReview:

    def test_author_can_update(self, client, make_user, make_recipe, make_review):
        author = make_user()
        review = make_review(make_recipe(), author, rating=2, comment="meh")

        res = client.put(f"/api/reviews/{review.id}", json={"rating": 4}, headers=auth_headers(author))

        assert res.status_code == 200
        assert res.json()["rating"] == 4
        assert res.json()["comment"] == "meh"

    def test_partial_update_still_validates_rating(self, client, make_user, make_recipe, make_review):
        author = make_user()
        review = make_review(make_recipe(), author)

        res = client.put(f"/api/reviews/{review.id}", json={"rating": 0}, headers=auth_headers(author))

        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "rating"

    def test_other_user_cannot_update(self, client, db, make_user, make_recipe, make_review):
        review = make_review(make_recipe(), make_user(), rating=2)

        res = client.put(f"/api/reviews/{review.id}", json={"rating": 5}, headers=auth_headers(make_user()))

        assert res.status_code == 403
        db.expire_all()
        assert db.get(Review, review.id).rating == 2

    def test_missing_review(self, client, make_user):
        res = client.put("/api/reviews/missing", json={"rating": 5}, headers=auth_headers(make_user()))

        assert res.status_code == 404


class TestDeleteReview:

    def test_author_can_delete(self, client, db, make_user, make_recipe, make_review):
        author = make_user()
        review = make_review(make_recipe(), author)
        review_id = review.id

        res = client.delete(f"/api/reviews/{review_id}", headers=auth_headers(author))

        assert res.status_code == 200
        db.expire_all()
        assert db.get(Review, review_id) is None

    def test_other_user_cannot_delete(self, client, db, make_user, make_recipe, make_review):
        review = make_review(make_recipe(), make_user())

        res = client.delete(f"/api/reviews/{review.id}", headers=auth_headers(make_user()))

        assert res.status_code == 403
        db.expire_all()
        assert db.get(Review, review.id) is not None

    def test_admin_can_delete(self, client, make_user, make_recipe, make_review):
        review = make_review(make_recipe(), make_user())

        res = client.delete(f"/api/reviews/{review.id}", headers=auth_headers(make_user(role="admin")))

        assert res.status_code == 200
