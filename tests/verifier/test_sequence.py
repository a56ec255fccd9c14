"""Tests for SequenceCopyVerifier (whole lists copied item by item)."""

import copy
from dataclasses import dataclass, replace

import pytest
from hypothesis import given
from hypothesis import strategies as st

from clonecheck import (
    CopyAssertionError,
    CopyVerifier,
    DefaultValueLeakError,
    FieldMismatchError,
    LengthMismatchError,
    MissingVerifierError,
    SequenceCopyVerifier,
    VerifierSettings,
)

SETTINGS = VerifierSettings(_env_file=None)


@dataclass
class Note:
    text: str


@dataclass
class Task:
    id: int
    title: str
    estimate: int | None
    note: Note


def make_tasks() -> list[Task]:
    return [
        Task(1, "write", 3, Note("draft")),
        Task(2, "review", 5, Note("careful")),
        Task(3, "ship", None, Note("friday")),
    ]


def task_list_verifier() -> SequenceCopyVerifier[Task]:
    return SequenceCopyVerifier(Task, settings=SETTINGS).with_verifier_for_field(
        lambda t: t.note, CopyVerifier(Note, settings=SETTINGS)
    )


def test_is_a_copy_verifier() -> None:
    verifier = task_list_verifier()

    assert isinstance(verifier, CopyVerifier)
    assert list(verifier.fields) == ["id", "title", "estimate", "note"]


def test_copied_list_passes() -> None:
    original = make_tasks()

    task_list_verifier().assert_copy(original, copy.deepcopy(original))


def test_empty_lists_pass() -> None:
    task_list_verifier().assert_copy([], [])


def test_none_lists() -> None:
    task_list_verifier().assert_copy(None, None)
    with pytest.raises(CopyAssertionError, match="copy is None"):
        task_list_verifier().assert_copy(make_tasks(), None)


def test_count_mismatch_reports_both_counts() -> None:
    original = make_tasks()

    with pytest.raises(LengthMismatchError, match="original has 3 elements, copy has 2") as exc_info:
        task_list_verifier().assert_copy(original, copy.deepcopy(original[:2]))

    assert exc_info.value.expected_count == 3
    assert exc_info.value.actual_count == 2


def test_mismatch_reports_index() -> None:
    original = make_tasks()
    clone = copy.deepcopy(original)
    clone[1] = replace(clone[1], title="approve")

    with pytest.raises(FieldMismatchError, match="title at index 1 was not copied") as exc_info:
        task_list_verifier().assert_copy(original, clone)

    assert exc_info.value.index == 1
    assert exc_info.value.field == "title"


def test_leak_reports_index() -> None:
    original = make_tasks()
    clone = copy.deepcopy(original)
    clone[2] = replace(clone[2], id=0)

    with pytest.raises(DefaultValueLeakError, match="Task:id at index 2 had a default value") as exc_info:
        task_list_verifier().assert_copy(original, clone)

    assert exc_info.value.index == 2


def test_optional_value_fields_are_not_leak_checked() -> None:
    """The list variant's leak check skips X | None fields.

    The single-pair engine treats a None copy as a leak for the same field.
    """
    original = make_tasks()

    task_list_verifier().assert_copy(original, copy.deepcopy(original))

    single = CopyVerifier(Task, settings=SETTINGS).with_verifier_for_field(
        lambda t: t.note, CopyVerifier(Note, settings=SETTINGS)
    )
    with pytest.raises(DefaultValueLeakError, match="estimate"):
        single.assert_copy(original[2], copy.deepcopy(original[2]))


def test_optional_value_none_still_compared() -> None:
    original = make_tasks()
    clone = copy.deepcopy(original)
    clone[0] = replace(clone[0], estimate=None)

    with pytest.raises(FieldMismatchError, match="estimate at index 0"):
        task_list_verifier().assert_copy(original, clone)


def test_missing_verifier_reports_index() -> None:
    original = make_tasks()

    with pytest.raises(MissingVerifierError, match="note at index 0: Missing verifier"):
        SequenceCopyVerifier(Task, settings=SETTINGS).assert_copy(original, copy.deepcopy(original))


def test_excluded_field_with_expected_value_reports_index() -> None:
    verifier = task_list_verifier().exclude_from_copy(lambda t: t.id, expected=0, assert_expected=True)
    original = make_tasks()
    clone = [replace(t, id=0) for t in copy.deepcopy(original)]

    verifier.assert_copy(original, clone)

    clone[1] = replace(clone[1], id=2)
    with pytest.raises(FieldMismatchError, match="id at index 1 was not equal to expected value 0"):
        verifier.assert_copy(original, clone)


def test_pairs_are_positional() -> None:
    original = make_tasks()

    with pytest.raises(FieldMismatchError, match="at index 0"):
        task_list_verifier().assert_copy(original, list(reversed(copy.deepcopy(original))))


def test_none_elements_pair_up() -> None:
    task = make_tasks()[0]

    task_list_verifier().assert_copy([task, None], [copy.deepcopy(task), None])

    with pytest.raises(CopyAssertionError, match="Task at index 1: copy is None"):
        task_list_verifier().assert_copy([task, task], [task, None])


@given(st.lists(st.integers(min_value=1), max_size=5), st.lists(st.integers(min_value=1), max_size=5))
def test_count_check_precedes_elements(original_ids: list[int], copy_ids: list[int]) -> None:
    """PROPERTY: lists of different length always fail with LengthMismatchError."""
    original = [Task(i, "t", 1, Note("n")) for i in original_ids]
    clone = [Task(i, "t", 1, Note("n")) for i in copy_ids]

    if len(original) != len(clone):
        with pytest.raises(LengthMismatchError):
            task_list_verifier().assert_copy(original, clone)
    elif original_ids == copy_ids:
        task_list_verifier().assert_copy(original, clone)
    else:
        with pytest.raises(FieldMismatchError):
            task_list_verifier().assert_copy(original, clone)
