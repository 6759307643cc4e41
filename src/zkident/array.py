from typing import Sequence


class SparseArray:
    """
    Sparse Array object (matrix dominated by zero elements)
    structured by triplets of (row, col, value) of non-zero elements in the matrix
    """

    def __init__(self, rows: Sequence[dict], n_row: int, n_col: int, p: int):
        self.p = p
        self.n_row = n_row
        self.n_col = n_col
        triplets = []

        for i, row in enumerate(rows):
            for col in sorted(row):
                value = row[col] % p
                if value != 0:
                    triplets.append((i, col, value))

        self.triplets = triplets

    def dot(self, vector):
        """dot product with vector"""
        result = [0] * self.n_row
        for row, col, value in self.triplets:
            result[row] += vector[col] * value

        return [x % self.p for x in result]

    def column_evaluations(self, row_coeffs: list):
        """
        Sum `row_coeffs[row] * value` per column,
        i.e. the transposed product with `row_coeffs`
        """
        result = [0] * self.n_col
        for row, col, value in self.triplets:
            result[col] += row_coeffs[row] * value

        return [x % self.p for x in result]

    def to_bytes(self) -> bytes:
        s = int.to_bytes(self.n_row, 8, "little") + int.to_bytes(self.n_col, 8, "little")
        for row, col, value in self.triplets:
            s += int.to_bytes(row, 8, "little")
            s += int.to_bytes(col, 8, "little")
            s += int.to_bytes(value, 32, "little")
        return s
