"""Error type checks for producers whose annotations are postponed strings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from option_result import (
    Err,
    Ok,
    PropagationTypeMismatchError,
    Result,
    catch_result,
    propagate_result,
)

if TYPE_CHECKING:
    from decimal import Decimal


@propagate_result
def scale(factor: Decimal, r: Result[int, str]) -> Result[int, str]:
    return Ok(r.unwrap() * int(factor))


@propagate_result
def passthrough[E](r: Result[int, E]) -> Result[int, E]:
    return Ok(r.unwrap())


def fetch_missing() -> Result[int, KeyError]:
    return Ok(Err('not a key error').unwrap())


class Ledger:
    @propagate_result
    def credit(self, amount: Decimal, r: Result[int, str]) -> Result[int, str]:
        return Ok(r.unwrap() + int(amount))


class TestTypeCheckingOnlyParameters:
    """Parameter annotations that cannot be resolved at runtime do not disable the check."""

    def test_matching_error_propagates(self):
        assert scale(2, Err('bad')) == Err('bad')

    def test_success(self):
        assert scale(2, Ok(3)) == Ok(6)

    def test_mismatched_error_raises(self):
        with pytest.raises(PropagationTypeMismatchError, match='int is not an instance of str'):
            scale(2, Err(404))

    def test_method(self):
        ledger = Ledger()
        assert ledger.credit(1, Err('closed')) == Err('closed')
        with pytest.raises(PropagationTypeMismatchError):
            ledger.credit(1, Err(404))


class TestPostponedReturnAnnotation:
    def test_module_level_producer(self):
        with pytest.raises(PropagationTypeMismatchError, match='KeyError'):
            catch_result(fetch_missing)

    def test_type_parameter_accepts_anything(self):
        assert passthrough(Err(404)) == Err(404)

    def test_local_class_reachable_through_closure(self):
        class Missing(Exception):
            pass

        def block() -> Result[int, Missing]:
            key = Err('s').unwrap()
            return Err(Missing(key))

        with pytest.raises(PropagationTypeMismatchError, match='str is not an instance of'):
            catch_result(block)

    def test_local_class_out_of_reach_is_accepted(self):
        class Missing(Exception):
            pass

        def block() -> Result[int, Missing]:
            return Ok(Err('s').unwrap())

        assert catch_result(block) == Err('s')
