from datetime import date

import matplotlib
import pytest

from heritage_health.database import FamilyStore
from heritage_health.tree import FamilyTree

matplotlib.use("Agg")

TODAY = date(2025, 6, 1)


@pytest.fixture
def store():
    store = FamilyStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def tree(store):
    return FamilyTree(store, today=TODAY)


@pytest.fixture
def family(tree):
    """Alice with children Bob and Carol; Bob has a daughter Dana."""
    alice = tree.create("Alice", age=70, conditions=["Hypertension", "Diabetes"])
    bob = tree.create("Bob", anchor=alice, relationship="child", age=45, conditions=["Diabetes"])
    carol = tree.create("Carol", anchor=alice, relationship="child", age=40)
    dana = tree.create("Dana", anchor=bob, relationship="child", age=12, conditions=["Asthma"])
    return {"alice": alice, "bob": bob, "carol": carol, "dana": dana}
