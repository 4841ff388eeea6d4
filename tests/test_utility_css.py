"""Tests for the utility-class stylesheet compiler."""

from folio.services.utility_css import (
    collect_classes,
    compile_css,
    escape_class,
    resolve_utility,
    write_stylesheet,
)


class TestResolveUtility:
    def test_static(self):
        assert resolve_utility("flex") == "display: flex"

    def test_spacing_scale(self):
        assert resolve_utility("px-5") == "padding-left: 1.25rem; padding-right: 1.25rem"
        assert resolve_utility("mt-0.5") == "margin-top: 0.125rem"
        assert resolve_utility("gap-0") == "gap: 0px"

    def test_gap_axis(self):
        assert resolve_utility("gap-x-2") == "column-gap: 0.5rem"

    def test_colors(self):
        assert resolve_utility("text-neutral-500") == "color: #737373"
        assert resolve_utility("bg-white") == "background-color: #ffffff"
        assert resolve_utility("border-neutral-200") == "border-color: #e5e5e5"

    def test_font_size_is_not_a_color(self):
        assert resolve_utility("text-sm").startswith("font-size")

    def test_grid(self):
        assert resolve_utility("grid-cols-2") == "grid-template-columns: repeat(2, minmax(0, 1fr))"
        assert resolve_utility("col-start-2") == "grid-column-start: 2"

    def test_unknown(self):
        assert resolve_utility("text-rainbow-500") is None
        assert resolve_utility("shadow-xl") is None


class TestEscapeClass:
    def test_escapes_variant_and_fraction(self):
        assert escape_class("sm:py-0.5") == "sm\\:py-0\\.5"


class TestCompileCss:
    def test_only_used_classes(self):
        css = compile_css(["flex", "px-4"])
        assert ".flex { display: flex; }" in css
        assert ".px-4 {" in css
        assert ".grid" not in css

    def test_hover_variant(self):
        assert ".hover\\:underline:hover { text-decoration-line: underline; }" in compile_css(["hover:underline"])

    def test_responsive_variant_in_media_query(self):
        css = compile_css(["sm:flex-row"])
        assert "@media (min-width: 640px) {" in css
        assert ".sm\\:flex-row { flex-direction: row; }" in css

    def test_dark_variant(self):
        css = compile_css(["dark:bg-neutral-900"])
        assert "@media (prefers-color-scheme: dark) {" in css

    def test_base_rules_before_media_rules(self):
        css = compile_css(["sm:px-8", "px-4"])
        assert css.index(".px-4") < css.index("@media")

    def test_prose_component(self):
        css = compile_css(["prose"])
        assert ".prose pre {" in css
        assert ".prose h2 {" in css

    def test_unknown_classes_ignored(self):
        assert compile_css(["nonsense", "foo:flex"]) == "\n"

    def test_deterministic(self):
        classes = ["mt-4", "flex", "sm:grid-cols-2", "dark:text-white", "hover:bg-neutral-100"]
        assert compile_css(classes) == compile_css(list(reversed(classes)))


class TestCollectClasses:
    def test_collects_from_documents(self):
        docs = ['<div class="flex gap-2"><p class="text-sm">x</p></div>', '<span class="flex">y</span>']
        assert collect_classes(docs) == {"flex", "gap-2", "text-sm"}


class TestWriteStylesheet:
    def test_scans_nested_pages(self, tmp_path):
        (tmp_path / "blog").mkdir()
        (tmp_path / "index.html").write_text('<div class="flex"></div>', encoding="utf-8")
        (tmp_path / "blog" / "index.html").write_text('<div class="mt-2"></div>', encoding="utf-8")
        path = write_stylesheet(tmp_path)
        css = path.read_text(encoding="utf-8")
        assert path.name == "styles.css"
        assert ".flex" in css
        assert ".mt-2" in css
