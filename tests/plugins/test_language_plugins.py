import pytest

from leet_analyzer.core import constants
from leet_analyzer.core.exceptions import (
    ConfigurationError,
    ParseError,
    UnsupportedLanguageError,
)
from leet_analyzer.plugins import (
    get_plugin,
    parse_code_file,
    plugin_for_path,
    resolve_language,
)

GO_SOURCE = """package main

import (
    "fmt"
    "sort"
)

func helper(s string) string {
    return fmt.Sprintf("{%s}", s)
}

func solve(nums []int) int {
    sort.Ints(nums)
    total := 0
    for _, n := range nums {
        if n > 0 {
            total += n
        }
    }
    return total
}
"""

JS_ARROW = """const lodash = require("lodash");

const maxProfit = (prices) => {
    let best = 0;
    return best;
};
"""


def test_registry_populates_constants():
    assert {"typescript", "javascript", "go"} <= constants.SUPPORTED_LANGUAGES
    assert constants.LANGUAGE_EXTENSIONS[".ts"] == "typescript"
    assert constants.LANGUAGE_EXTENSIONS[".go"] == "go"
    assert constants.LANGUAGE_ALIASES["js"] == "javascript"


def test_resolve_language():
    assert resolve_language("TS") == "typescript"
    assert resolve_language("golang") == "go"
    with pytest.raises(ConfigurationError):
        resolve_language("cobol")


def test_plugin_for_path():
    assert plugin_for_path("two-sum.ts").name == "typescript"
    assert plugin_for_path("/x/TWO-SUM.JS").name == "javascript"
    with pytest.raises(UnsupportedLanguageError):
        plugin_for_path("two_sum.py")
    with pytest.raises(UnsupportedLanguageError):
        plugin_for_path("Makefile")


def test_typescript_function_declaration(two_sum_source):
    parsed = get_plugin("typescript").parse(two_sum_source, "two-sum.ts")

    assert parsed.language == "typescript"
    assert parsed.main_function.name == "twoSum"
    assert parsed.main_function.start_line == 1
    assert parsed.main_function.end_line == 11
    assert parsed.code_for_analysis.startswith("function twoSum(")


def test_javascript_arrow_function_and_require():
    parsed = get_plugin("javascript").parse(JS_ARROW)

    assert parsed.main_function.name == "maxProfit"
    assert parsed.main_function.start_line == 3
    assert parsed.imports == ['const lodash = require("lodash")']


def test_typescript_imports():
    source = 'import { Heap } from "heap-js";\nfunction solve() {\n  return 1;\n}\n'
    parsed = get_plugin("typescript").parse(source)
    assert parsed.imports == ['import { Heap } from "heap-js"']
    assert parsed.main_function.name == "solve"


def test_no_function_falls_back_to_content():
    parsed = get_plugin("javascript").parse("let x = 1;\n")
    assert parsed.main_function is None
    assert parsed.code_for_analysis == "let x = 1;\n"


def test_go_prefers_solve_and_matches_braces():
    parsed = get_plugin("go").parse(GO_SOURCE)

    main = parsed.main_function
    assert main.name == "solve"
    assert main.code.startswith("func solve(nums []int) int {")
    assert main.code.endswith("return total\n}")
    assert main.start_line == 12
    assert main.end_line == 21
    assert parsed.imports == ['import (\n    "fmt"\n    "sort"\n)']


def test_go_method_receiver():
    source = "type S struct{}\n\nfunc (s *S) twoSum(a []int) []int {\n    return a\n}\n"
    main = get_plugin("go").find_main_function(source)
    assert main.name == "twoSum"
    assert main.code.endswith("}")


def test_parse_code_file(tmp_path, two_sum_source):
    path = tmp_path / "two-sum.ts"
    path.write_text(two_sum_source, encoding="utf-8")

    parsed = parse_code_file(path)

    assert parsed.file_path == str(path)
    assert parsed.main_function.name == "twoSum"


def test_parse_code_file_unreadable(tmp_path):
    with pytest.raises(ParseError):
        parse_code_file(tmp_path / "missing.go")
