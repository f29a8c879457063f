import os
import tempfile
import unittest

import gpr.num as gnp
from gpr.errors import PersistenceCorruptError, PersistenceMissingError
from gpr.misc.matrixio import check_file, read_matrix, write_matrix


class TestMatrixIO(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def path(self, name):
        return os.path.join(self.dir, name)

    def write_text(self, name, text):
        filename = self.path(name)
        with open(filename, "w") as f:
            f.write(text)
        return filename

    def test_double_precision_is_exact(self):
        gnp.set_seed(11)
        M = gnp.randn(4, 3) * 1e3
        filename = self.path("M.txt")
        write_matrix(M, filename)
        R = read_matrix(filename, "float64")
        self.assertEqual(R.dtype, gnp.float64)
        self.assertTrue(gnp.array_equal(R, M))

    def test_single_precision_is_exact(self):
        gnp.set_seed(12)
        M = gnp.randn(3, 5, dtype="float32")
        filename = self.path("M.txt")
        write_matrix(M, filename)
        R = read_matrix(filename, "float32")
        self.assertEqual(R.dtype, gnp.float32)
        self.assertTrue(gnp.array_equal(R, M))

    def test_layout(self):
        filename = self.path("M.txt")
        write_matrix(gnp.asarray([[1.0, 2.5], [-3.0, 0.125]]), filename)
        with open(filename) as f:
            lines = f.read().splitlines()
        self.assertEqual(lines, ["1 2.5", "-3 0.125"])

    def test_single_row_and_single_column(self):
        row = gnp.asarray([[1.0, 2.0, 3.0]])
        col = gnp.asarray([[1.0], [2.0], [3.0]])
        write_matrix(row, self.path("row.txt"))
        write_matrix(col, self.path("col.txt"))
        self.assertEqual(read_matrix(self.path("row.txt")).shape, (1, 3))
        self.assertEqual(read_matrix(self.path("col.txt")).shape, (3, 1))

    def test_vector_is_rejected(self):
        with self.assertRaises(ValueError):
            write_matrix(gnp.ones(3), self.path("v.txt"))

    def test_missing_file(self):
        with self.assertRaises(PersistenceMissingError):
            read_matrix(self.path("absent.txt"))
        with self.assertRaises(FileNotFoundError):
            check_file(self.path("absent.txt"))

    def test_directory(self):
        os.mkdir(self.path("sub"))
        with self.assertRaises(PersistenceMissingError):
            read_matrix(self.path("sub"))

    def test_non_numeric(self):
        filename = self.write_text("bad.txt", "1 2\n3 x\n")
        with self.assertRaises(PersistenceCorruptError):
            read_matrix(filename)

    def test_ragged(self):
        filename = self.write_text("ragged.txt", "1 2\n3\n")
        with self.assertRaises(PersistenceCorruptError):
            read_matrix(filename)


if __name__ == "__main__":
    unittest.main()
