"""Tests for product API endpoints."""

import pytest
from fastapi.testclient import TestClient


class TestCreateProduct:
    """Tests for POST /products endpoint."""

    def test_create_product(self, client: TestClient) -> None:
        """Should create a product with an assigned id."""
        response = client.post("/products", json={"name": "Widget", "price": 9.99})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["name"] == "Widget"
        assert data["price"] == 9.99
        assert data["available"] is True
        assert data["created_at"] is not None

    def test_create_ignores_client_id(self, client: TestClient) -> None:
        """Unknown body fields such as id are dropped."""
        response = client.post("/products", json={"id": 50, "name": "Widget", "price": 1})

        assert response.status_code == 201
        assert response.json()["id"] == 1

    def test_create_rejects_negative_price(self, client: TestClient) -> None:
        """Price must not be negative."""
        response = client.post("/products", json={"name": "Widget", "price": -1})

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert any(d["field"] == "body.price" for d in data["details"])

    def test_create_rejects_excess_precision(self, client: TestClient) -> None:
        """Price allows at most four decimal places."""
        response = client.post("/products", json={"name": "Widget", "price": 1.23456})
        assert response.status_code == 422

    def test_create_requires_name(self, client: TestClient) -> None:
        """Name is required."""
        response = client.post("/products", json={"price": 1})
        assert response.status_code == 422


class TestListProducts:
    """Tests for GET /products endpoint."""

    def test_list_empty(self, client: TestClient) -> None:
        """Empty catalog lists nothing."""
        response = client.get("/products")

        assert response.status_code == 200
        assert response.json() == {
            "data": [],
            "meta": {"limit": 10, "page": 1, "totalPages": 0, "total": 0},
        }

    def test_list_pagination(self, client: TestClient, create_product) -> None:
        """25 products at limit 10 leaves 5 on page 3."""
        for i in range(25):
            create_product(name=f"Product {i + 1}", price=i + 1)

        response = client.get("/products?limit=10&page=3")

        assert response.status_code == 200
        data = response.json()
        assert len(data["data"]) == 5
        assert data["data"][0]["name"] == "Product 21"
        assert data["meta"] == {"limit": 10, "page": 3, "totalPages": 3, "total": 25}

    def test_list_page_beyond_end(self, client: TestClient, create_product) -> None:
        """A page past the end is empty, not an error."""
        create_product()

        response = client.get("/products?limit=10&page=5")

        assert response.status_code == 200
        data = response.json()
        assert data["data"] == []
        assert data["meta"] == {"limit": 10, "page": 5, "totalPages": 1, "total": 1}

    def test_list_rejects_zero_limit(self, client: TestClient) -> None:
        """limit=0 is rejected before reaching the service."""
        response = client.get("/products?limit=0")
        assert response.status_code == 422

    def test_list_rejects_zero_page(self, client: TestClient) -> None:
        """Pages are 1-based."""
        response = client.get("/products?page=0")
        assert response.status_code == 422


class TestGetProduct:
    """Tests for GET /products/{product_id} endpoint."""

    def test_get_product(self, client: TestClient, create_product) -> None:
        """Should return an available product."""
        created = create_product()

        response = client.get(f"/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Widget"

    def test_get_product_not_found(self, client: TestClient) -> None:
        """Missing product is a bad request with a typed error code."""
        response = client.get("/products/99")

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "PRODUCT_NOT_FOUND"
        assert data["message"] == "Product with id 99 not found"
        assert data["details"] == {"product_id": 99}
        assert data["request_id"] is not None

    def test_get_largest_product_id(self, client: TestClient) -> None:
        """The largest storable id still reaches the service."""
        response = client.get("/products/2147483647")

        assert response.status_code == 400
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestProductIdBounds:
    """Ids outside the 32-bit id column are rejected before any lookup."""

    @pytest.mark.parametrize("method", ["get", "patch", "delete"])
    @pytest.mark.parametrize("product_id", [0, 2147483648, 3000000000])
    def test_path_id_out_of_range(
        self, client: TestClient, method: str, product_id: int
    ) -> None:
        """Path ids must be positive 32-bit integers."""
        kwargs = {"json": {"name": "Gadget"}} if method == "patch" else {}

        response = client.request(method.upper(), f"/products/{product_id}", **kwargs)

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert any(d["field"] == "path.product_id" for d in data["details"])

    def test_body_id_out_of_range(self, client: TestClient) -> None:
        """The body id of PATCH /products has the same bound."""
        response = client.patch("/products", json={"id": 3000000000, "name": "Gadget"})

        assert response.status_code == 422
        assert any(d["field"] == "body.id" for d in response.json()["details"])

    def test_validate_id_out_of_range(self, client: TestClient) -> None:
        """Each id sent for validation has the same bound."""
        response = client.post("/products/validate", json={"ids": [1, 3000000000]})

        assert response.status_code == 422
        assert any(d["field"] == "body.ids.1" for d in response.json()["details"])


class TestUpdateProduct:
    """Tests for PATCH /products and PATCH /products/{product_id} endpoints."""

    def test_update_product(self, client: TestClient, create_product) -> None:
        """Only sent fields change."""
        created = create_product()

        response = client.patch(f"/products/{created['id']}", json={"price": 19.5})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["price"] == 19.5
        assert data["name"] == "Widget"

    def test_update_product_not_found(self, client: TestClient) -> None:
        """Updating a missing product fails."""
        response = client.patch("/products/5", json={"name": "Gadget"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"

    def test_update_with_id_in_body(self, client: TestClient, create_product) -> None:
        """The target id may be sent in the body instead of the path."""
        created = create_product()

        response = client.patch("/products", json={"id": created["id"], "name": "Gadget"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["name"] == "Gadget"
        assert data["price"] == 9.99

    def test_update_with_id_in_body_requires_id(self, client: TestClient) -> None:
        """Body updates must name their target."""
        response = client.patch("/products", json={"name": "Gadget"})
        assert response.status_code == 422


class TestRemoveProduct:
    """Tests for DELETE /products/{product_id} endpoint."""

    def test_remove_product(self, client: TestClient, create_product) -> None:
        """Removal returns the record with available=false."""
        created = create_product()

        response = client.delete(f"/products/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["available"] is False
        assert data["name"] == "Widget"

        assert client.get(f"/products/{created['id']}").status_code == 400

    def test_remove_twice(self, client: TestClient, create_product) -> None:
        """The second removal fails."""
        created = create_product()

        assert client.delete(f"/products/{created['id']}").status_code == 200

        response = client.delete(f"/products/{created['id']}")
        assert response.status_code == 400
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestValidateProducts:
    """Tests for POST /products/validate endpoint."""

    def test_validate_existing(self, client: TestClient, create_product) -> None:
        """Duplicates collapse to one record per id."""
        a = create_product(name="A")
        b = create_product(name="B")

        response = client.post(
            "/products/validate", json={"ids": [a["id"], a["id"], b["id"]]}
        )

        assert response.status_code == 200
        assert sorted(p["id"] for p in response.json()) == [a["id"], b["id"]]

    def test_validate_includes_removed(self, client: TestClient, create_product) -> None:
        """Removed products still exist for validation."""
        created = create_product()
        client.delete(f"/products/{created['id']}")

        response = client.post("/products/validate", json={"ids": [created["id"]]})

        assert response.status_code == 200
        assert response.json()[0]["available"] is False

    def test_validate_missing(self, client: TestClient, create_product) -> None:
        """One unknown id fails the batch."""
        created = create_product()

        response = client.post("/products/validate", json={"ids": [created["id"], 404]})

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "PRODUCTS_NOT_FOUND"
        assert data["message"] == "Some products were not found"

    def test_validate_rejects_non_positive_ids(self, client: TestClient) -> None:
        """Ids must be positive."""
        response = client.post("/products/validate", json={"ids": [0]})
        assert response.status_code == 422
