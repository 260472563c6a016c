"""
Example 03: Repository Pattern

This example demonstrates the Repository and aggregation helpers against a
running MongoDB (mongodb://localhost:27017).
"""

from typing import Annotated, Any, Optional

from bson import ObjectId

from doc_mapper import (
    AbstractAggregation,
    ConnectionConfig,
    ConnectionManager,
    DateUnit,
    Document,
    Persist,
    Repository,
)


class Order(Document):
    """Order entity"""
    id: Annotated[Optional[ObjectId], Persist("_id")] = None
    customer: Annotated[str, Persist()] = ""
    total: Annotated[int, Persist()] = 0


class OrdersPerMonth(AbstractAggregation):
    """Order count and amount grouped by month of creation"""

    timezone = "UTC"

    def pipeline(self) -> list[dict[str, Any]]:
        return [
            {
                "$group": {
                    "_id": self.date_trunc("$created_at", DateUnit.MONTH),
                    "orders": {"$sum": 1},
                    "amount": {"$sum": "$total"},
                }
            },
            {"$sort": {"_id": 1}},
        ]


class OrderRepository(Repository[Order]):
    """Repository for Order entities"""

    def by_customer(self, customer: str) -> list[Order]:
        return self.find({"customer": customer})


def main():
    config = ConnectionConfig(database="doc_mapper_examples")
    manager = ConnectionManager(config)
    repo = OrderRepository(manager.collection("orders"), Order)

    try:
        print("=== Repository Pattern ===\n")

        for customer, total in [("alice", 1200), ("bob", 450), ("alice", 300)]:
            order = Order()
            order.customer = customer
            order.total = total
            order.id = repo.insert(order)
            print(f"Inserted {order.id} for {customer}")

        print("\nAlice's orders:")
        for order in repo.by_customer("alice"):
            print(f"   {order.id}: {order.total}")

        print("\nPer month:")
        for row in repo.aggregate(OrdersPerMonth()):
            print(f"   {row['_id']:%Y-%m}: {row['orders']} orders, {row['amount']} total")
    finally:
        manager.database.drop_collection("orders")
        manager.close()


if __name__ == "__main__":
    main()
