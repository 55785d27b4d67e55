"""Tests for tagcheck.parsers.java - Javadoc index and declaration scanning."""

import textwrap

from tagcheck.core.models import DeclarationKind
from tagcheck.parsers import JavaSource


def _source(text: str) -> JavaSource:
    return JavaSource(textwrap.dedent(text))


class TestJavadocBefore:
    """Tests for JavaSource.javadoc_before."""

    def test_multi_line_block(self, sample_source):
        source = JavaSource(sample_source)
        comment = source.javadoc_before(9)

        assert comment is not None
        assert comment.start_line == 5
        assert comment.end_line == 8
        assert comment.lines == ("/**", " * Demo type.", " * @author Jane", " */")

    def test_indented_block_starts_at_opening(self, sample_source):
        comment = JavaSource(sample_source).javadoc_before(17)
        assert comment.lines == ("/**", "     * Ctor.", "     */")

    def test_single_line_block(self, sample_source):
        comment = JavaSource(sample_source).javadoc_before(12)
        assert comment.lines == ("/** Field. */",)

    def test_skips_line_comments(self, sample_source):
        comment = JavaSource(sample_source).javadoc_before(24)
        assert comment.lines == ("/** Method. */",)

    def test_none_when_code_in_between(self, sample_source):
        source = JavaSource(sample_source)
        assert source.javadoc_before(28) is None
        assert source.javadoc_before(39) is None

    def test_skips_blank_lines(self):
        source = _source(
            """\
            /** Doc. */


            class A {}
            """
        )
        assert source.javadoc_before(4).lines == ("/** Doc. */",)

    def test_plain_block_comment_is_not_javadoc(self):
        source = _source(
            """\
            /* Not javadoc. */
            class A {}
            /**/
            class B {}
            """
        )
        assert source.javadoc_before(2) is None
        assert source.javadoc_before(4) is None

    def test_text_stops_at_closing(self):
        source = _source(
            """\
            /** Doc.
              */ class A {}
            """
        )
        assert source.javadoc_before(3).lines == ("/** Doc.", "  */")

    def test_javadoc_inside_string_ignored(self):
        source = _source(
            """\
            class A {
                String s = "/** @author nobody */";
                void m() {}
            }
            """
        )
        assert source.javadocs() == []

    def test_crlf_line_endings(self):
        source = JavaSource("/**\r\n * @author Jane\r\n */\r\nclass A {}\r\n")
        assert source.javadoc_before(4).lines == ("/**", " * @author Jane", " */")


class TestDeclarations:
    """Tests for JavaSource.declarations."""

    def test_sample_declarations(self, sample_source):
        found = [
            (d.kind, d.name, d.line, d.column)
            for d in JavaSource(sample_source).declarations()
        ]
        K = DeclarationKind
        assert found == [
            (K.CLASS_DEF, "Demo", 9, 0),
            (K.CTOR_DEF, "Demo", 17, 4),
            (K.METHOD_DEF, "items", 24, 4),
            (K.ENUM_DEF, "Color", 28, 4),
            (K.ENUM_CONSTANT_DEF, "RED", 29, 8),
            (K.ENUM_CONSTANT_DEF, "GREEN", 29, 13),
            (K.ENUM_CONSTANT_DEF, "BLUE", 29, 41),
            (K.CTOR_DEF, "Color", 30, 8),
            (K.CTOR_DEF, "Color", 31, 8),
            (K.ANNOTATION_DEF, "Marker", 34, 4),
            (K.ANNOTATION_FIELD_DEF, "value", 35, 8),
            (K.ANNOTATION_FIELD_DEF, "nums", 36, 8),
            (K.INTERFACE_DEF, "Api", 39, 4),
            (K.METHOD_DEF, "call", 40, 8),
        ]

    def test_position_is_first_modifier_or_annotation(self):
        source = _source(
            """\
            /** Doc. */
            @SuppressWarnings({"a", "b"})
            @com.example.Marker(value = Foo.class)
            public final class A<T extends Comparable<T>> extends B implements C, D {
            }
            """
        )
        [decl] = source.declarations()
        assert (decl.kind, decl.name, decl.line, decl.column) == (
            DeclarationKind.CLASS_DEF,
            "A",
            2,
            0,
        )

    def test_braces_in_strings_and_comments(self):
        source = _source(
            """\
            class A {
                String open = "{";
                char close = '}';
                // }
                /* { */
                void m() { String s = "}"; }
                void n() {}
            }
            """
        )
        assert [d.name for d in source.declarations()] == ["A", "m", "n"]

    def test_initializers_and_anonymous_classes_skipped(self):
        source = _source(
            """\
            class A {
                static { init(); }
                { other(); }
                Runnable r = new Runnable() {
                    public void run() {}
                };
                int[] values = {1, 2, 3};
                void m() {
                    class Local {}
                }
            }
            """
        )
        assert [(d.kind, d.name) for d in source.declarations()] == [
            (DeclarationKind.CLASS_DEF, "A"),
            (DeclarationKind.METHOD_DEF, "m"),
        ]

    def test_nested_types_and_records(self):
        source = _source(
            """\
            package p;
            import static java.util.Objects.requireNonNull;

            public interface Outer {
                record Point(int x, int y) {
                    Point {
                        requireNonNull(x);
                    }
                    int sum() { return x + y; }
                }
                enum Empty { ; void f() {} }
                abstract class Inner<T> {
                    abstract T get();
                    Inner() {}
                }
            }
            """
        )
        assert [(d.kind, d.name) for d in source.declarations()] == [
            (DeclarationKind.INTERFACE_DEF, "Outer"),
            (DeclarationKind.METHOD_DEF, "sum"),
            (DeclarationKind.ENUM_DEF, "Empty"),
            (DeclarationKind.METHOD_DEF, "f"),
            (DeclarationKind.CLASS_DEF, "Inner"),
            (DeclarationKind.METHOD_DEF, "get"),
            (DeclarationKind.CTOR_DEF, "Inner"),
        ]

    def test_text_block_masked(self):
        source = _source(
            '''\
            class A {
                String s = """
                    } class Fake {
                    """;
                void m() {}
            }
            '''
        )
        assert [d.name for d in source.declarations()] == ["A", "m"]

    def test_unterminated_input_does_not_hang(self):
        source = _source(
            """\
            class A {
                void m( {
            """
        )
        assert source.declarations()[0].name == "A"

    def test_declarations_cached(self, sample_source):
        source = JavaSource(sample_source)
        assert source.declarations() is source.declarations()


class TestFromFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "A.java"
        path.write_text("/** @author Jane */\nclass A {}\n", encoding="utf-8")

        source = JavaSource.from_file(path)

        assert source.path == str(path)
        assert source.javadoc_before(2).lines == ("/** @author Jane */",)
