"""Tests for identifier generators."""

from tripboard.utils.ids import SequentialIdGenerator, UuidIdGenerator


def test_sequential_ids_count_per_prefix() -> None:
    """Each prefix has its own counter."""
    ids = SequentialIdGenerator()

    assert [ids.new_id("day"), ids.new_id("day"), ids.new_id("act")] == [
        "day-1",
        "day-2",
        "act-1",
    ]


def test_uuid_ids_are_unique() -> None:
    """Random ids never repeat and keep their prefix."""
    ids = UuidIdGenerator()
    generated = {ids.new_id("trash") for _ in range(100)}

    assert len(generated) == 100
    assert all(i.startswith("trash-") for i in generated)
