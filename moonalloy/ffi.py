"""
Handle-based entry points for foreign callers.

Every Array/Matrix operation is exposed as a flat function taking opaque
handles and primitive values. Ownership rules:

    - Each handle owns exactly one instance.
    - Functions only read their input handles; any returned handle is new
      and owned by the caller, who must release it with array_free() /
      matrix_free().
    - Passing None, a released handle, or a handle of the wrong kind is a
      precondition violation and raises NullHandleError.
    - *_to_string() returns a caller-owned, null-terminated char buffer.
"""

from __future__ import annotations

import ctypes
import operator
from typing import Any, Sequence

from moonalloy.core.exceptions import NullHandleError, ValidationError
from moonalloy.linalg.array import Array
from moonalloy.linalg.matrix import Matrix
from moonalloy.linalg.solvers import gauss_elimination


class _Handle:
    """Opaque owner of a single instance."""

    __slots__ = ('_obj',)
    _kind: type = object

    def __init__(self, obj: Any):
        if not isinstance(obj, self._kind):
            raise NullHandleError(
                f"{type(self).__name__}: expected {self._kind.__name__}, "
                f"got {type(obj).__name__}"
            )
        self._obj = obj

    @property
    def released(self) -> bool:
        return self._obj is None

    def _release(self) -> None:
        if self._obj is None:
            raise NullHandleError(f"{type(self).__name__}: already released")
        self._obj = None

    def __repr__(self) -> str:
        state = 'released' if self._obj is None else 'live'
        return f"<{type(self).__name__} {state}>"


class ArrayHandle(_Handle):
    __slots__ = ()
    _kind = Array


class MatrixHandle(_Handle):
    __slots__ = ()
    _kind = Matrix


def _deref(handle: Any, kind: type[_Handle], name: str) -> Any:
    if handle is None:
        raise NullHandleError(f"{name}: null handle")
    if not isinstance(handle, kind):
        raise NullHandleError(
            f"{name}: expected {kind.__name__}, got {type(handle).__name__}"
        )
    if handle._obj is None:
        raise NullHandleError(f"{name}: handle has been released")
    return handle._obj


def _array(handle: ArrayHandle | None, name: str = 'array') -> Array:
    return _deref(handle, ArrayHandle, name)


def _matrix(handle: MatrixHandle | None, name: str = 'matrix') -> Matrix:
    return _deref(handle, MatrixHandle, name)


def _dim(value: Any, name: str) -> int:
    try:
        value = operator.index(value)
    except TypeError as e:
        raise ValidationError(f"{name}: expected an integer, got {type(value).__name__}") from e
    if value < 0:
        raise ValidationError(f"{name}: must be non-negative, got {value}")
    return value


def _c_string(text: str) -> ctypes.Array:
    return ctypes.create_string_buffer(text.encode('utf-8'))


# ----------------------------------------------------------------------
# Array entry points
# ----------------------------------------------------------------------

def array_new() -> ArrayHandle:
    return ArrayHandle(Array.new())


def array_from(values: Sequence[float]) -> ArrayHandle:
    return ArrayHandle(Array.from_values(values))


def array_of(value: float, length: int) -> ArrayHandle:
    return ArrayHandle(Array.of(value, _dim(length, 'length')))


def array_zeros(length: int) -> ArrayHandle:
    return ArrayHandle(Array.zeros(_dim(length, 'length')))


def array_ones(length: int) -> ArrayHandle:
    return ArrayHandle(Array.ones(_dim(length, 'length')))


def array_len(ptr: ArrayHandle) -> int:
    return _array(ptr).length


def array_get(ptr: ArrayHandle, index: int) -> float:
    return _array(ptr).get(index)


def array_set(ptr: ArrayHandle, value: float, index: int) -> None:
    _array(ptr).set(value, index)


def array_splice(ptr: ArrayHandle, first: int, last: int) -> ArrayHandle:
    return ArrayHandle(_array(ptr).splice(first, last))


def array_sum(ptr: ArrayHandle) -> float:
    return _array(ptr).sum()


def array_average(ptr: ArrayHandle) -> float:
    return _array(ptr).average()


def array_norm(ptr: ArrayHandle) -> float:
    return _array(ptr).norm()


def array_scalar_add(ptr: ArrayHandle, scal: float) -> ArrayHandle:
    return ArrayHandle(_array(ptr).scalar_add(scal))


def array_scalar_sub(ptr: ArrayHandle, scal: float) -> ArrayHandle:
    return ArrayHandle(_array(ptr).scalar_sub(scal))


def array_scalar(ptr: ArrayHandle, scal: float) -> ArrayHandle:
    return ArrayHandle(_array(ptr).scalar_mult(scal))


def array_add(ptr1: ArrayHandle, ptr2: ArrayHandle) -> ArrayHandle:
    return ArrayHandle(_array(ptr1, 'ptr1').plus(_array(ptr2, 'ptr2')))


def array_sub(ptr1: ArrayHandle, ptr2: ArrayHandle) -> ArrayHandle:
    return ArrayHandle(_array(ptr1, 'ptr1').minus(_array(ptr2, 'ptr2')))


def array_mult(ptr1: ArrayHandle, ptr2: ArrayHandle) -> ArrayHandle:
    return ArrayHandle(_array(ptr1, 'ptr1').mult(_array(ptr2, 'ptr2')))


def array_dotp(ptr1: ArrayHandle, ptr2: ArrayHandle) -> float:
    return _array(ptr1, 'ptr1').dotp(_array(ptr2, 'ptr2'))


def array_concat(ptr1: ArrayHandle, ptr2: ArrayHandle) -> ArrayHandle:
    return ArrayHandle(_array(ptr1, 'ptr1').concat(_array(ptr2, 'ptr2')))


def array_to_string(ptr: ArrayHandle) -> ctypes.Array:
    return _c_string(str(_array(ptr)))


def array_print(ptr: ArrayHandle) -> None:
    print(_array(ptr))


def array_free(ptr: ArrayHandle) -> None:
    _array(ptr)
    ptr._release()


# ----------------------------------------------------------------------
# Matrix entry points
# ----------------------------------------------------------------------

def matrix_from(rows: Sequence[Sequence[float]]) -> MatrixHandle:
    return MatrixHandle(Matrix.from_rows(rows))


def matrix_of(value: float, rows: int, cols: int) -> MatrixHandle:
    return MatrixHandle(Matrix.of(value, _dim(rows, 'rows'), _dim(cols, 'cols')))


def matrix_zeros(rows: int, cols: int) -> MatrixHandle:
    return MatrixHandle(Matrix.zeros(_dim(rows, 'rows'), _dim(cols, 'cols')))


def matrix_ones(rows: int, cols: int) -> MatrixHandle:
    return MatrixHandle(Matrix.ones(_dim(rows, 'rows'), _dim(cols, 'cols')))


def matrix_identity(length: int) -> MatrixHandle:
    return MatrixHandle(Matrix.identity(_dim(length, 'length')))


def matrix_get(ptr: MatrixHandle, i: int, j: int) -> float:
    return _matrix(ptr).get(i, j)


def matrix_set(ptr: MatrixHandle, value: float, i: int, j: int) -> None:
    _matrix(ptr).set(value, i, j)


def matrix_splice(ptr: MatrixHandle, row: int, first: int, last: int) -> ArrayHandle:
    return ArrayHandle(_matrix(ptr).splice(row, first, last))


def matrix_set_row(ptr1: MatrixHandle, ptr2: ArrayHandle, row: int) -> None:
    _matrix(ptr1, 'ptr1').set_row(_array(ptr2, 'ptr2'), row)


def matrix_swap_rows(ptr: MatrixHandle, i: int, j: int) -> None:
    _matrix(ptr).swap_rows(i, j)


def matrix_augment(ptr1: MatrixHandle, ptr2: ArrayHandle) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr1, 'ptr1').augment(_array(ptr2, 'ptr2')))


def matrix_add(ptr1: MatrixHandle, ptr2: MatrixHandle) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr1, 'ptr1').plus(_matrix(ptr2, 'ptr2')))


def matrix_sub(ptr1: MatrixHandle, ptr2: MatrixHandle) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr1, 'ptr1').minus(_matrix(ptr2, 'ptr2')))


def matrix_scalar(ptr: MatrixHandle, scal: float) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr).scalar(scal))


def matrix_elem_mult(ptr1: MatrixHandle, ptr2: MatrixHandle) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr1, 'ptr1').elem_mult(_matrix(ptr2, 'ptr2')))


def matrix_transpose(ptr: MatrixHandle) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr).transpose())


def matrix_mult(ptr1: MatrixHandle, ptr2: MatrixHandle) -> MatrixHandle:
    return MatrixHandle(_matrix(ptr1, 'ptr1').mult(_matrix(ptr2, 'ptr2')))


def matrix_to_string(ptr: MatrixHandle) -> ctypes.Array:
    return _c_string(str(_matrix(ptr)))


def matrix_print(ptr: MatrixHandle) -> None:
    print(_matrix(ptr))


def matrix_free(ptr: MatrixHandle) -> None:
    _matrix(ptr)
    ptr._release()


# ----------------------------------------------------------------------
# Solvers
# ----------------------------------------------------------------------

def linalg_gauss(ptr1: MatrixHandle, ptr2: ArrayHandle) -> ArrayHandle:
    return ArrayHandle(gauss_elimination(_matrix(ptr1, 'ptr1'), _array(ptr2, 'ptr2')))
