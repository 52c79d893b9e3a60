"""
Tests for the Gaussian elimination solver.

Validates:
    - Known systems (exact traces) and round trips against scipy.linalg
    - Partial pivoting: pivot selection, tie-breaking, zero-column skipping
    - Singular systems: non-finite output + RuntimeWarning by default,
      SingularMatrixError when check_singular=True
    - Shape preconditions and input immutability
    - solve() diagnostics: rank, pivots, timing, residuals
"""

import numpy as np
import pytest
from scipy import linalg as sla

from moonalloy.core.compute.tolerances import CPU_FP64
from moonalloy.core.exceptions import (
    DimensionError,
    SingularMatrixError,
    ValidationError,
)
from moonalloy.linalg import (
    Array,
    LinearSystemDesign,
    Matrix,
    gauss_elimination,
    solve,
)
from moonalloy.linalg._elimination import (
    back_substitute,
    forward_eliminate,
    select_pivot,
)


# ═══════════════════════════════════════════════════════════════════════
# Known systems
# ═══════════════════════════════════════════════════════════════════════


class TestKnownSystems:

    def test_two_by_two_exact(self, small_system):
        # Pivot row 1 (|-6| > |3|), factor -0.5, reduced row [0, 5, 10]
        a, b = small_system
        assert gauss_elimination(a, b) == Array([1.0, 2.0])

    def test_three_by_three(self, three_by_three_system):
        a, b = three_by_three_system
        x = gauss_elimination(a, b)
        np.testing.assert_allclose(x.to_numpy(), [2.0, 3.0, -1.0], rtol=1e-12)

    def test_one_by_one(self):
        x = gauss_elimination(Matrix.from_rows([[4.0]]), Array([8.0]))
        assert x == Array([2.0])

    def test_identity_returns_rhs(self):
        b = Array([1.5, -2.0, 3.25])
        assert gauss_elimination(Matrix.identity(3), b) == b

    def test_zero_leading_entry_needs_pivot(self):
        a = Matrix.from_rows([[0.0, 1.0], [1.0, 0.0]])
        assert gauss_elimination(a, Array([2.0, 3.0])) == Array([3.0, 2.0])

    def test_accepts_array_likes(self):
        x = gauss_elimination([[3.0, 2.0], [-6.0, 6.0]], [7.0, 6.0])
        assert x == Array([1.0, 2.0])

    def test_inputs_not_mutated(self, three_by_three_system):
        a, b = three_by_three_system
        a_before, b_before = a.copy(), b.copy()
        gauss_elimination(a, b)
        assert a == a_before
        assert b == b_before


class TestRoundTrip:
    """Solving A·x = b for b built from a known x recovers x."""

    def test_random_system(self, random_system):
        a, b, x_true = random_system
        x = gauss_elimination(Matrix(a), Array(b))
        np.testing.assert_allclose(x.to_numpy(), x_true, rtol=1e-10, atol=1e-12)

    def test_matches_scipy(self, rng):
        for n in (2, 3, 5, 8):
            a = rng.standard_normal((n, n))
            b = rng.standard_normal(n)
            x = gauss_elimination(Matrix(a), Array(b))
            np.testing.assert_allclose(
                x.to_numpy(), sla.solve(a, b),
                rtol=CPU_FP64.rtol * 100, atol=CPU_FP64.atol * 100,
            )

    def test_b_from_row_dot_products(self, rng):
        a = Matrix(rng.standard_normal((4, 4)) + 4 * np.eye(4))
        x_true = Array([1.0, -2.0, 0.5, 3.0])
        b = Array([row.dotp(x_true) for row in a])
        x = gauss_elimination(a, b)
        np.testing.assert_allclose(x.to_numpy(), x_true.to_numpy(), rtol=1e-10)


# ═══════════════════════════════════════════════════════════════════════
# Preconditions
# ═══════════════════════════════════════════════════════════════════════


class TestPreconditions:

    def test_non_square_rejected(self):
        with pytest.raises(DimensionError, match="square"):
            gauss_elimination(Matrix.ones(2, 3), Array([1.0, 2.0]))

    def test_rhs_length_mismatch(self):
        with pytest.raises(DimensionError, match="b: right-hand side"):
            gauss_elimination(Matrix.identity(2), Array([1.0, 2.0, 3.0]))

    def test_negative_tol_rejected(self, small_system):
        a, b = small_system
        with pytest.raises(ValidationError):
            gauss_elimination(a, b, tol=-1.0)

    def test_nan_tol_rejected(self):
        with pytest.raises(ValidationError, match="tol"):
            gauss_elimination(
                Matrix.identity(2), Array([1.0, 2.0]),
                check_singular=True, tol=float("nan"),
            )

    def test_zero_tol_accepts_healthy_system(self):
        x = gauss_elimination(
            Matrix.identity(2), Array([1.0, 2.0]), check_singular=True, tol=0.0,
        )
        assert x == Array([1.0, 2.0])

    def test_missing_rhs(self):
        with pytest.raises(ValidationError):
            solve(Matrix.identity(2))

    def test_design_with_extra_rhs(self, small_system):
        a, b = small_system
        design = LinearSystemDesign.from_arrays(a, b)
        with pytest.raises(ValidationError):
            solve(design, b)


# ═══════════════════════════════════════════════════════════════════════
# Singular systems
# ═══════════════════════════════════════════════════════════════════════


class TestSingular:

    def test_dependent_rows_give_nan_and_warn(self):
        a = Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]])
        with pytest.warns(RuntimeWarning, match="non-finite"):
            x = gauss_elimination(a, Array([3.0, 6.0]))
        assert np.all(np.isnan(x.to_numpy()))

    def test_inconsistent_system_gives_inf(self):
        a = Matrix.from_rows([[1.0, 1.0], [1.0, 1.0]])
        with pytest.warns(RuntimeWarning):
            sol = solve(a, Array([1.0, 2.0]))
        assert np.isinf(sol.x.get(1))
        assert sol.pivot_columns == (0, 2)
        assert sol.rank == 1
        assert not sol.is_finite
        assert not sol.is_consistent()
        assert sol.warnings

    @pytest.mark.parametrize("entry", [gauss_elimination, solve])
    def test_warning_points_at_caller(self, entry):
        a = Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]])
        with pytest.warns(RuntimeWarning) as record:
            entry(a, Array([3.0, 6.0]))
        assert record[0].filename == __file__

    def test_has_warning(self):
        a = Matrix.from_rows([[1.0, 1.0], [1.0, 1.0]])
        with pytest.warns(RuntimeWarning):
            sol = solve(a, Array([1.0, 2.0]))
        assert sol.has_warning("non-finite")
        assert not sol.has_warning("converge")

    def test_check_singular_raises(self):
        a = Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            gauss_elimination(a, Array([3.0, 6.0]), check_singular=True)
        assert exc_info.value.matrix_name == 'A'
        assert exc_info.value.rank == 1
        assert exc_info.value.expected_rank == 2

    def test_zero_matrix(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            solve(Matrix.zeros(3, 3), Array.zeros(3), check_singular=True)
        assert exc_info.value.rank == 0

    def test_near_singular_with_tolerance(self):
        a = Matrix.from_rows([[1.0, 1.0], [1.0, 1.0 + 1e-12]])
        b = Array([2.0, 2.0])
        x = gauss_elimination(a, b, check_singular=True)
        assert np.all(np.isfinite(x.to_numpy()))
        with pytest.raises(SingularMatrixError):
            gauss_elimination(a, b, check_singular=True, tol=1e-9)


# ═══════════════════════════════════════════════════════════════════════
# Kernels
# ═══════════════════════════════════════════════════════════════════════


class TestKernels:

    def test_pivot_is_largest_magnitude(self):
        m = Matrix.from_rows([[1.0, 0.0], [-5.0, 0.0], [3.0, 0.0]])
        assert select_pivot(m, 0, 0) == 1

    def test_pivot_tie_goes_to_first_row(self):
        m = Matrix.from_rows([[1.0, 0.0], [-3.0, 0.0], [3.0, 0.0]])
        assert select_pivot(m, 0, 0) == 1

    def test_pivot_search_starts_at_h(self):
        m = Matrix.from_rows([[9.0, 0.0], [1.0, 0.0], [2.0, 0.0]])
        assert select_pivot(m, 1, 0) == 2

    def test_forward_elimination_trace(self, small_system):
        a, b = small_system
        echelon = forward_eliminate(a.augment(b))
        assert echelon.reduced == Matrix.from_rows([[-6.0, 6.0, 6.0], [0.0, 5.0, 10.0]])
        assert echelon.pivot_columns == (0, 1)
        assert echelon.n_swaps == 1

    def test_echelon_is_upper_triangular(self, three_by_three_system):
        a, b = three_by_three_system
        reduced = forward_eliminate(a.augment(b)).reduced
        for i in range(3):
            for j in range(i):
                assert reduced.get(i, j) == 0.0

    def test_zero_column_is_skipped(self):
        m = Matrix.from_rows([[0.0, 1.0, 2.0], [0.0, 3.0, 4.0]])
        echelon = forward_eliminate(m)
        assert echelon.pivot_columns == (1, 2)

    def test_back_substitution(self):
        r = Matrix.from_rows([[2.0, 1.0, 5.0], [0.0, 4.0, 8.0]])
        assert back_substitute(r) == Array([1.5, 2.0])


# ═══════════════════════════════════════════════════════════════════════
# solve() diagnostics
# ═══════════════════════════════════════════════════════════════════════


class TestSolveDiagnostics:

    def test_solution_matches_gauss_elimination(self, three_by_three_system):
        a, b = three_by_three_system
        assert solve(a, b).x == gauss_elimination(a, b)

    def test_info_and_backend(self, three_by_three_system):
        sol = solve(*three_by_three_system)
        assert sol.info['method'] == 'gauss_partial_pivot'
        assert sol.info['rank'] == 3
        assert sol.backend_name == 'cpu_gauss'
        assert sol.rank == 3
        assert sol.is_full_rank
        assert sol.warnings == ()
        assert not sol.has_warning("non-finite")

    def test_timing_sections(self, small_system):
        sol = solve(*small_system)
        assert {'total_seconds', 'augment', 'forward_elimination',
                'back_substitution'} <= set(sol.timing)
        assert sol.timing['total_seconds'] >= sol.timing['back_substitution']

    def test_residuals(self, random_system):
        a, b, _ = random_system
        sol = solve(a, b)
        assert sol.residuals.length == 6
        assert sol.residual_norm < 1e-10
        assert sol.is_consistent(CPU_FP64)
        assert sol.is_consistent()

    def test_ill_conditioned_system_is_consistent(self):
        h = sla.hilbert(6)
        x_true = np.ones(6)
        sol = solve(h, h @ x_true)
        assert sol.condition_number > 1e4
        assert sol.is_consistent()

    def test_echelon_copy(self, small_system):
        sol = solve(*small_system)
        e = sol.echelon
        e.set(0.0, 0, 0)
        assert sol.echelon.get(0, 0) == -6.0

    def test_solve_from_design(self, small_system):
        design = LinearSystemDesign.from_arrays(*small_system)
        assert solve(design).x == Array([1.0, 2.0])

    def test_design_owns_copies(self, small_system):
        a, b = small_system
        design = LinearSystemDesign.from_arrays(a, b)
        a.set(0.0, 0, 0)
        b.set(0.0, 0)
        assert solve(design).x == Array([1.0, 2.0])

    def test_summary(self, small_system):
        text = solve(*small_system).summary()
        assert "Rank:" in text
        assert "Equations:      2" in text
