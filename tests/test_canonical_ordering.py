import pandas as pd

from constants import RESULT_ORDER, SHOT_TYPE_ORDER
from korfstats.models import CANONICAL_SHOT_TYPES
from utils import apply_categorical_order, stable_sort


def test_shot_type_order_is_canonical():
    df = pd.DataFrame(
        {
            "ShotType": ["other", "penalty", "distance", "outstart"],
            "Goals": [1, 2, 3, 4],
        }
    )

    ordered = apply_categorical_order(df, "ShotType", SHOT_TYPE_ORDER)
    ordered = stable_sort(ordered, by=["ShotType"], ascending=[True])

    assert ordered["ShotType"].astype(str).tolist() == ["distance", "penalty", "outstart", "other"]
    assert [t.value for t in CANONICAL_SHOT_TYPES] == list(SHOT_TYPE_ORDER)


def test_result_order_is_canonical_and_sort_is_stable():
    df = pd.DataFrame(
        {
            "Result": ["V", "W", "D", "W"],
            "Opponent": ["a", "b", "c", "d"],
        }
    )

    ordered = apply_categorical_order(df, "Result", RESULT_ORDER)
    ordered = stable_sort(ordered, by="Result")

    assert ordered["Opponent"].tolist() == ["b", "d", "c", "a"]
