"""Cart load test scenarios.

CartJourney walks one shopper through the full cart lifecycle.
ContendedCartUser shares a handful of owners between many Locust users so
concurrent adds for the same cart and product hit the per-owner lock and
the stock check at the same time.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import auth_headers, cart_item_data, product_ids, quantity_update_data, user_id
from loadtests.helpers.response import extract_error_detail, is_expected_conflict
from loadtests.helpers.state import CartJourneyState

SHARED_OWNERS = [f"usr-lt-shared-{n:02d}" for n in range(5)]


class CartJourney(SequentialTaskSet):
    """Get Cart -> Add x3 -> Update Quantity -> Remove Line -> Clear.

    Generates events: CartItemAdded (x3), CartItemQuantityUpdated,
    CartItemRemoved, CartCleared.
    """

    def on_start(self):
        owner = user_id()
        self.state = CartJourneyState(owner=owner, headers=auth_headers(owner))

    def _record(self, resp, action):
        if resp.status_code == 200:
            self.state.sync(resp.json())
        elif is_expected_conflict(resp):
            resp.success()
        else:
            resp.failure(f"{action} failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def get_cart(self):
        with self.client.get("/cart", headers=self.state.headers, catch_response=True, name="GET /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"Get cart failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()
                return
            self.state.sync(resp.json())

    @task
    def add_items(self):
        for _ in range(3):
            with self.client.post(
                "/cart/items",
                json=cart_item_data(),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                self._record(resp, "Add cart item")

    @task
    def update_quantity(self):
        if not self.state.product_ids:
            return
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/cart/items/{product_id}",
            json=quantity_update_data(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/items/{product_id}",
        ) as resp:
            self._record(resp, "Update cart item")

    @task
    def remove_line(self):
        if not self.state.product_ids:
            return
        product_id = self.state.product_ids[0]
        with self.client.delete(
            f"/cart/items/{product_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /cart/items/{product_id}",
        ) as resp:
            self._record(resp, "Remove cart item")

    @task
    def clear(self):
        with self.client.delete("/cart", headers=self.state.headers, catch_response=True, name="DELETE /cart") as resp:
            self._record(resp, "Clear cart")

    @task
    def done(self):
        self.interrupt()


class CartShopper(HttpUser):
    """One independent shopper per Locust user."""

    wait_time = between(0.5, 2)
    tasks = [CartJourney]


class ContendedCartUser(HttpUser):
    """Many Locust users mutating the same few carts.

    Expect a mix of 200, 409 (stock exhausted) and 503 (lock timeout) answers.
    Anything else is a failure.
    """

    wait_time = constant_pacing(0.2)

    def on_start(self):
        self.owner = random.choice(SHARED_OWNERS)
        self.headers = auth_headers(self.owner)
        self.product_id = random.choice(product_ids())

    @task(5)
    def add_same_product(self):
        with self.client.post(
            "/cart/items",
            json={"product_id": self.product_id, "quantity": 1},
            headers=self.headers,
            catch_response=True,
            name="[CONTENDED] POST /cart/items",
        ) as resp:
            if resp.status_code != 200 and not is_expected_conflict(resp):
                resp.failure(f"Contended add failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.status_code != 200:
                resp.success()

    @task(1)
    def clear_shared_cart(self):
        with self.client.delete(
            "/cart",
            headers=self.headers,
            catch_response=True,
            name="[CONTENDED] DELETE /cart",
        ) as resp:
            if resp.status_code == 503:
                resp.success()
            elif resp.status_code != 200:
                resp.failure(f"Contended clear failed: {resp.status_code}: {extract_error_detail(resp)}")
