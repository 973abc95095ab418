"""
Integration Tests for Daily Menus API.

Tests the planner endpoints: date-keyed upsert, form loading,
planned dates and deletes.
"""

from httpx import AsyncClient


class TestSaveDailyMenu:
    """Tests for PUT /api/v1/daily-menus."""

    async def test_first_save_creates(self, client: AsyncClient, auth_headers, api, create_menu, create_dish):
        """Should create a plan when the day has none."""
        menu = await create_menu("M1")
        dish = await create_dish("D1", "first")

        response = await client.put(
            "/api/v1/daily-menus",
            json={"date": "2024-06-01", "menu_id": menu["id"], "first_course_id": dish["id"]},
            headers=auth_headers,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["action"] == "created"
        assert data["daily_menu"]["date"] == "2024-06-01"
        assert data["daily_menu"]["menu_id"] == menu["id"]
        assert data["daily_menu"]["first_course_id"] == dish["id"]
        assert data["daily_menu"]["dessert_id"] is None

    async def test_resave_same_day_updates_single_record(
        self,
        client: AsyncClient,
        auth_headers,
        api,
        create_menu,
        create_dish,
    ):
        """Changing only the dessert and saving again keeps one record with both courses."""
        menu = await create_menu("M1")
        first = await create_dish("D1", "first")
        dessert = await create_dish("D2", "dessert")

        created = await client.put(
            "/api/v1/daily-menus",
            json={"date": "2024-06-01", "menu_id": menu["id"], "first_course_id": first["id"]},
            headers=auth_headers,
        )
        created_plan = api.assert_success(created, expected_status=201)["data"]["daily_menu"]

        form = await client.get(
            "/api/v1/daily-menus/form",
            params={"date": "2024-06-01"},
            headers=auth_headers,
        )
        form_data = api.assert_success(form)["data"]

        updated = await client.put(
            "/api/v1/daily-menus",
            json={
                "date": "2024-06-01T18:30:00+02:00",
                "menu_id": form_data["menu_id"],
                "first_course_id": form_data["first_course_id"],
                "second_course_id": form_data["second_course_id"],
                "dessert_id": dessert["id"],
            },
            headers=auth_headers,
        )
        result = api.assert_success(updated)["data"]
        assert result["action"] == "updated"
        assert result["daily_menu"]["id"] == created_plan["id"]
        assert result["daily_menu"]["created_at"] == created_plan["created_at"]

        listing = await client.get("/api/v1/daily-menus", headers=auth_headers)
        plans = api.assert_success(listing)["data"]
        assert len(plans) == 1
        assert plans[0]["first_course_id"] == first["id"]
        assert plans[0]["dessert_id"] == dessert["id"]

    async def test_missing_menu_rejected(self, client: AsyncClient, auth_headers, api):
        """Should reject a save without a menu as missing information."""
        response = await client.put(
            "/api/v1/daily-menus",
            json={"date": "2024-06-01"},
            headers=auth_headers,
        )

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["message"] == "Please select a date and menu type"
        assert data["error"]["details"]["missing_fields"] == ["menu_id"]

    async def test_missing_date_rejected(self, client: AsyncClient, auth_headers, api):
        """Should reject a save without a date as missing information."""
        response = await client.put(
            "/api/v1/daily-menus",
            json={"menu_id": "m1"},
            headers=auth_headers,
        )

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert data["error"]["details"]["missing_fields"] == ["date"]


class TestDailyMenuForm:
    """Tests for GET /api/v1/daily-menus/form."""

    async def test_unplanned_day_is_empty(self, client: AsyncClient, auth_headers, api):
        """Should return empty selections for a day without a plan."""
        response = await client.get(
            "/api/v1/daily-menus/form",
            params={"date": "2024-06-02"},
            headers=auth_headers,
        )

        data = api.assert_success(response)["data"]
        assert data == {
            "date": "2024-06-02",
            "id": None,
            "exists": False,
            "menu_id": None,
            "first_course_id": None,
            "second_course_id": None,
            "dessert_id": None,
        }

    async def test_time_of_day_is_ignored(self, client: AsyncClient, auth_headers, api):
        """Should resolve any time on the planned day to the same plan."""
        saved = await client.put(
            "/api/v1/daily-menus",
            json={"date": "2024-06-01", "menu_id": "m1"},
            headers=auth_headers,
        )
        plan_id = api.assert_success(saved, expected_status=201)["data"]["daily_menu"]["id"]

        for candidate in ("2024-06-01T00:00:00", "2024-06-01T23:59:59Z"):
            response = await client.get(
                "/api/v1/daily-menus/form",
                params={"date": candidate},
                headers=auth_headers,
            )
            data = api.assert_success(response)["data"]
            assert data["id"] == plan_id
            assert data["exists"] is True

    async def test_invalid_date(self, client: AsyncClient, auth_headers, api):
        """Should reject a value that is not an ISO date."""
        response = await client.get(
            "/api/v1/daily-menus/form",
            params={"date": "first of June"},
            headers=auth_headers,
        )

        api.assert_error(response, 400, "VAL_VALIDATION_ERROR")


class TestListDailyMenus:
    """Tests for GET /api/v1/daily-menus and /dates."""

    async def _plan(self, client: AsyncClient, headers: dict[str, str], day: str) -> None:
        response = await client.put(
            "/api/v1/daily-menus",
            json={"date": day, "menu_id": "m1"},
            headers=headers,
        )
        assert response.status_code == 201

    async def test_latest_date_first_with_range(self, client: AsyncClient, auth_headers, api):
        """Should order by date descending and honour the range."""
        for day in ("2024-06-03", "2024-06-01", "2024-06-05"):
            await self._plan(client, auth_headers, day)

        response = await client.get("/api/v1/daily-menus", headers=auth_headers)
        dates = [plan["date"] for plan in api.assert_success(response)["data"]]
        assert dates == ["2024-06-05", "2024-06-03", "2024-06-01"]

        response = await client.get(
            "/api/v1/daily-menus",
            params={"date_from": "2024-06-02", "date_to": "2024-06-04"},
            headers=auth_headers,
        )
        dates = [plan["date"] for plan in api.assert_success(response)["data"]]
        assert dates == ["2024-06-03"]

    async def test_planned_dates(self, client: AsyncClient, auth_headers, api):
        """Should list each planned day once, in order."""
        for day in ("2024-06-03", "2024-06-01"):
            await self._plan(client, auth_headers, day)

        response = await client.get("/api/v1/daily-menus/dates", headers=auth_headers)

        assert api.assert_success(response)["data"] == ["2024-06-01", "2024-06-03"]


class TestDanglingReferences:
    """Deleting referenced dishes or menus leaves plans alone."""

    async def test_delete_referenced_dish_and_menu(
        self,
        client: AsyncClient,
        auth_headers,
        api,
        create_menu,
        create_dish,
    ):
        """Should delete both and keep the plan with its old ids."""
        menu = await create_menu("M1")
        dish = await create_dish("D1", "first")
        saved = await client.put(
            "/api/v1/daily-menus",
            json={"date": "2024-06-01", "menu_id": menu["id"], "first_course_id": dish["id"]},
            headers=auth_headers,
        )
        plan = api.assert_success(saved, expected_status=201)["data"]["daily_menu"]

        assert (await client.delete(f"/api/v1/dishes/{dish['id']}", headers=auth_headers)).status_code == 204
        assert (await client.delete(f"/api/v1/menus/{menu['id']}", headers=auth_headers)).status_code == 204

        response = await client.get(f"/api/v1/daily-menus/{plan['id']}", headers=auth_headers)
        data = api.assert_success(response)["data"]
        assert data["menu_id"] == menu["id"]
        assert data["first_course_id"] == dish["id"]

    async def test_delete_plan(self, client: AsyncClient, auth_headers, api):
        """Should delete a plan by id."""
        saved = await client.put(
            "/api/v1/daily-menus",
            json={"date": "2024-06-01", "menu_id": "m1"},
            headers=auth_headers,
        )
        plan_id = api.assert_success(saved, expected_status=201)["data"]["daily_menu"]["id"]

        response = await client.delete(f"/api/v1/daily-menus/{plan_id}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/v1/daily-menus/{plan_id}", headers=auth_headers)
        api.assert_error(response, 404, "RES_NOT_FOUND")
