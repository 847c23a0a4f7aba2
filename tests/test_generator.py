"""End-to-end tests: Go sources on disk through to generated code."""
import os
import tempfile
import textwrap
import unittest

from gosym.config import BindgenConfig
from gosym.errors import AmbiguousPackageError, ParseError
from gosym.generator import Generator, export_declarations


SCENARIO = """
    package widgets

    const Foo = 1

    // Deprecated: use Foo
    const Bar = 2

    func DoThing() {}

    type Widget struct{}
"""


class GoTreeTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, relpath, text):
        path = os.path.join(self.root, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(textwrap.dedent(text).lstrip())


class TestExportDeclarations(GoTreeTestCase):
    def test_scenario(self):
        self.write("widgets/widgets.go", SCENARIO)

        output = export_declarations(self.root, "example.com/widgets", "widgets", "Widgets")

        self.assertEqual(
            output,
            "\n"
            "func initWidgets() {\n"
            "\tenv.Packages[\"example.com/widgets\"] = map[string]reflect.Value{\n"
            "\t\t// constants\n"
            "\t\t\"Foo\": reflect.ValueOf(widgets.Foo),\n"
            "\n"
            "\t\t// variables\n"
            "\n"
            "\t\t// functions\n"
            "\t\t\"DoThing\": reflect.ValueOf(widgets.DoThing),\n"
            "\t}\n"
            "\tenv.PackageTypes[\"example.com/widgets\"] = map[string]reflect.Type{\n"
            "\t\t\"Widget\": reflect.TypeOf((*widgets.Widget)(nil)).Elem(),\n"
            "\t}\n"
            "}\n",
        )
        self.assertNotIn("Bar", output)

    def test_deterministic_across_runs_and_file_order(self):
        self.write("p/b.go", "package p\n\nconst Zed = 1\nvar Alpha = 2\n")
        self.write("p/a.go", "package p\n\nconst Beta = 1\nfunc Gamma() {}\n")

        first = export_declarations(self.root, "p", "p", "P")
        second = export_declarations(self.root, "p", "p", "P")

        self.assertEqual(first, second)
        self.assertLess(first.index('"Beta"'), first.index('"Zed"'))

    def test_duplicates_across_files_collapse(self):
        self.write("p/a_linux.go", "package p\n\nconst Sep = '/'\n")
        self.write("p/a_windows.go", "package p\n\nconst Sep = '\\\\'\n")

        output = export_declarations(self.root, "p", "p", "P")

        self.assertEqual(output.count('"Sep"'), 1)

    def test_deprecated_period_marker(self):
        self.write("p/p.go", """
            package p

            // Old does nothing. Deprecated. Use New.
            func Old() {}

            func New() {}
        """)
        output = export_declarations(self.root, "p", "p", "P")
        self.assertNotIn("Old", output)
        self.assertIn('"New"', output)

    def test_unexported_and_methods_absent(self):
        self.write("p/p.go", """
            package p

            type T struct{}

            func (T) Method() {}

            func helper() {}

            var hidden = 1
        """)
        output = export_declarations(self.root, "p", "p", "P")
        self.assertIn('"T"', output)
        for name in ("Method", "helper", "hidden"):
            self.assertNotIn(name, output)

    def test_filtered_files_do_not_leak(self):
        self.write("p/p.go", "package p\n\nfunc Real() {}\n")
        self.write("p/p_test.go", "package p\n\nfunc TestHelper() {}\n")
        self.write("p/fuzz.go", "package p\n\nfunc FuzzHelper() {}\n")
        self.write("p/example_p.go", "package p\n\nfunc ExampleHelper() {}\n")

        output = export_declarations(self.root, "p", "p", "P")

        self.assertIn('"Real"', output)
        for name in ("TestHelper", "FuzzHelper", "ExampleHelper"):
            self.assertNotIn(name, output)

    def test_only_test_file_yields_empty_output(self):
        self.write("p/p_test.go", "package p\n\nfunc Exported() {}\n")
        self.assertEqual(export_declarations(self.root, "p", "p", "P"), "")

    def test_nothing_exported_yields_empty_output(self):
        self.write("p/p.go", "package p\n\nfunc private() {}\n")
        self.assertEqual(export_declarations(self.root, "p", "p", "P"), "")

    def test_main_package_skipped(self):
        self.write("cmd/tool/main.go", "package main\n\nfunc Exported() {}\n\nfunc main() {}\n")
        self.assertEqual(export_declarations(self.root, "cmd/tool", "cmd/tool", "Tool"), "")

    def test_external_test_package_ignored(self):
        self.write("p/p.go", "package p\n\nfunc Real() {}\n")
        self.write("p/helpers.go", "package p_test\n\nfunc Helper() {}\n")

        output = export_declarations(self.root, "p", "p", "P")

        self.assertIn('"Real"', output)
        self.assertNotIn("Helper", output)

    def test_two_packages_is_an_error(self):
        self.write("p/a.go", "package a\n\nfunc A() {}\n")
        self.write("p/b.go", "package b\n\nfunc B() {}\n")

        with self.assertRaises(AmbiguousPackageError):
            export_declarations(self.root, "p", "p", "P")

    def test_parse_error_propagates(self):
        self.write("p/p.go", "package p\n\nfunc Broken( {\n")
        with self.assertRaises(ParseError):
            export_declarations(self.root, "p", "p", "P")

    def test_config_exclusions(self):
        self.write("p/p.go", "package p\n\nvar ErrTrailingComma = 1\nvar ErrSyntax = 2\n")
        config = BindgenConfig(root=self.root, exclude_symbols=["ErrTrailingComma"])

        output = export_declarations(self.root, "p", "p", "P", config=config)

        self.assertNotIn("ErrTrailingComma", output)
        self.assertIn('"ErrSyntax"', output)


class TestGenerator(GoTreeTestCase):
    def test_build_returns_document(self):
        self.write("widgets/widgets.go", SCENARIO)
        document = Generator().build(self.root, "example.com/widgets", "widgets", "Widgets")
        self.assertEqual(document.package_name, "widgets")
        self.assertEqual(document.section("constants").symbols(), ["Foo"])

    def test_build_returns_none_when_skipped(self):
        self.write("p/p.go", "package p\n")
        self.assertIsNone(Generator().build(self.root, "p", "p", "P"))

    def test_first_strategy_tolerates_two_packages(self):
        self.write("p/a.go", "package a\n\nfunc A() {}\n")
        self.write("p/b.go", "package b\n\nfunc B() {}\n")

        output = Generator(strategy="first").generate(self.root, "p", "p", "P")

        self.assertIn("reflect.ValueOf(a.A)", output)
        self.assertNotIn("b.B", output)

    def test_json_renderer(self):
        self.write("widgets/widgets.go", SCENARIO)
        output = Generator(renderer="json").generate(self.root, "example.com/widgets", "widgets", "Widgets")
        self.assertIn('"symbol": "DoThing"', output)

    def test_from_config_overrides(self):
        config = BindgenConfig(root=self.root, strategy="first", format="json")
        generator = Generator.from_config(config, renderer="go", strategy=None)
        self.assertEqual(type(generator.renderer).__name__, "GoRegistrationRenderer")
        self.assertEqual(type(generator.strategy).__name__, "FirstPackageStrategy")


if __name__ == '__main__':
    unittest.main()
