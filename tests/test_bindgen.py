import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

import bindgen


def _write(root, relpath, text):
    path = os.path.join(root, relpath)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


class TestBindgenCLI(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = bindgen.main(argv)
        return rc, out.getvalue(), err.getvalue()

    def test_no_arguments_prints_help_and_returns_nonzero(self):
        rc, output, _ = self.run_main([])
        self.assertNotEqual(rc, 0)
        self.assertIn("usage:", output)
        self.assertIn("registration code", output)

    def test_generate_prints_code(self):
        _write(self.root, "src/widgets/w.go", "package widgets\n\nfunc New() {}\n")

        rc, output, _ = self.run_main([
            "--config", self.root, "generate", os.path.join(self.root, "src"), "widgets",
        ])

        self.assertEqual(rc, 0)
        self.assertIn("func initWidgets() {", output)
        self.assertIn('"New": reflect.ValueOf(widgets.New),', output)

    def test_generate_with_dir_init_and_format(self):
        _write(self.root, "src/widgets/w.go", "package widgets\n\nvar Hidden = 1\nvar Shown = 2\n")

        rc, output, _ = self.run_main([
            "--config", self.root, "--format", "json",
            "generate", os.path.join(self.root, "src"), "example.com/widgets",
            "--dir", "widgets", "--init", "W", "--exclude", "Hidden",
        ])

        self.assertEqual(rc, 0)
        self.assertIn('"init": "initW"', output)
        self.assertIn('"Shown"', output)
        self.assertNotIn("Hidden", output)

    def test_generate_skipped_package_prints_nothing(self):
        _write(self.root, "src/p/p_test.go", "package p\n\nfunc Exported() {}\n")
        rc, output, _ = self.run_main(["--config", self.root, "generate", os.path.join(self.root, "src"), "p"])
        self.assertEqual(rc, 0)
        self.assertEqual(output, "")

    def test_generate_parse_error_returns_2(self):
        _write(self.root, "src/p/p.go", "package p\n\nfunc (\n")
        rc, _, err = self.run_main(["--config", self.root, "generate", os.path.join(self.root, "src"), "p"])
        self.assertEqual(rc, 2)
        self.assertIn("Error:", err)

    def test_generate_missing_directory_exits(self):
        with self.assertRaises(SystemExit):
            self.run_main(["generate", self.root, "missing"])

    @patch("bindgen.Generator")
    def test_generate_passes_options_to_generator(self, mock_generator_cls):
        mock_generator = MagicMock()
        mock_generator.generate.return_value = "CODE"
        mock_generator_cls.from_config.return_value = mock_generator
        os.makedirs(os.path.join(self.root, "p"))

        rc, output, _ = self.run_main([
            "--config", self.root, "generate", self.root, "p", "--strategy", "first", "--exclude", "X",
        ])

        self.assertEqual(rc, 0)
        self.assertEqual(output, "CODE")
        _, kwargs = mock_generator_cls.from_config.call_args
        self.assertEqual(kwargs["strategy"], "first")
        self.assertEqual(kwargs["excluded_symbols"], ["X"])
        mock_generator.generate.assert_called_once_with(self.root, "p", "p", "P")

    def test_walk_discovers_and_writes_files(self):
        src = os.path.join(self.root, "src")
        out = os.path.join(self.root, "out")
        _write(src, "encoding/json/json.go", "package json\n\nfunc Marshal() {}\n")
        _write(src, "internal/empty/e.go", "package empty\n\nfunc hidden() {}\n")
        _write(src, "testdata/t.go", "package t\n\nfunc T() {}\n")

        rc, _, _ = self.run_main(["--config", self.root, "walk", src, "--out", out, "--package", "stdlib"])

        self.assertEqual(rc, 0)
        self.assertEqual(sorted(os.listdir(out)), ["encoding_json.go"])
        with open(os.path.join(out, "encoding_json.go"), encoding="utf-8") as f:
            text = f.read()
        self.assertIn("package stdlib\n", text)
        self.assertIn('\t"encoding/json"\n', text)
        self.assertIn("func initEncodingJson() {", text)

    def test_walk_uses_configured_packages(self):
        src = os.path.join(self.root, "src")
        _write(src, "a/a.go", "package a\n\nfunc A() {}\n")
        _write(src, "b/b.go", "package b\n\nfunc B() {}\n")
        _write(self.root, ".bindgen.yml", "packages:\n  - path: example.com/a\n    dir: a\n    init: Alpha\noutput:\n  directory: gen\n")

        rc, _, _ = self.run_main(["--config", self.root, "walk", src])

        self.assertEqual(rc, 0)
        self.assertEqual(os.listdir(os.path.join(self.root, "gen")), ["example.com_a.go"])

    def test_walk_stops_on_error_unless_keep_going(self):
        src = os.path.join(self.root, "src")
        out = os.path.join(self.root, "out")
        _write(src, "a/a.go", "package a\n\nfunc (\n")
        _write(src, "b/b.go", "package b\n\nfunc B() {}\n")

        rc, _, err = self.run_main(["--config", self.root, "walk", src, "--out", out])
        self.assertEqual(rc, 2)
        self.assertIn("Error:", err)
        self.assertEqual(os.listdir(out), [])

        rc, _, _ = self.run_main(["--config", self.root, "walk", src, "--out", out, "--keep-going"])
        self.assertEqual(rc, 2)
        self.assertEqual(os.listdir(out), ["b.go"])

    def test_generate_malformed_config_returns_2(self):
        _write(self.root, "src/p/p.go", "package p\n\nfunc P() {}\n")
        _write(self.root, ".bindgen.yml", "strategy: [unclosed\n")

        rc, output, err = self.run_main(["--config", self.root, "generate", os.path.join(self.root, "src"), "p"])

        self.assertEqual(rc, 2)
        self.assertEqual(output, "")
        self.assertIn("Error:", err)

    def test_walk_malformed_config_returns_2(self):
        _write(self.root, ".bindgen.yml", "exclude_symbols: NotAList\n")
        rc, _, err = self.run_main(["--config", self.root, "walk", self.root, "--out", os.path.join(self.root, "out")])
        self.assertEqual(rc, 2)
        self.assertIn("exclude_symbols", err)

    def test_walk_rejects_colliding_output_names(self):
        src = os.path.join(self.root, "src")
        out = os.path.join(self.root, "out")
        _write(src, "a/b_c/x.go", "package b_c\n\nfunc X() {}\n")
        _write(src, "a_b/c/y.go", "package c\n\nfunc Y() {}\n")

        rc, _, err = self.run_main(["--config", self.root, "walk", src, "--out", out])

        self.assertEqual(rc, 2)
        self.assertIn("a_b_c.go", err)
        self.assertEqual(os.listdir(out), [])

    def test_output_filename(self):
        self.assertEqual(bindgen.output_filename("encoding/json", ".go"), "encoding_json.go")

    def test_walk_without_output_directory_exits(self):
        with self.assertRaises(SystemExit):
            self.run_main(["--config", self.root, "walk", self.root])


if __name__ == '__main__':
    unittest.main()
