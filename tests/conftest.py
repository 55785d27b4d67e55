"""Shared fixtures for tagcheck tests."""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

SAMPLE_SOURCE = """\
package demo;

import java.util.List;

/**
 * Demo type.
 * @author Jane
 */
@Deprecated
public class Demo {
    /** Field. */
    private int x = 1;

    /**
     * Ctor.
     */
    public Demo() {
        if (x > 0) { x = 2; }
    }

    // trailing note
    /** Method. */
    // a line comment
    public <T> List<T> items(String s) throws Exception {
        return null;
    }

    enum Color {
        RED, GREEN("g") { void f() {} }, BLUE;
        Color() {}
        Color(String s) {}
    }

    @interface Marker {
        String value() default "x";
        int[] nums() default {1, 2};
    }

    interface Api {
        void call();
    }
}
"""


class StubComments:
    """Comment index backed by a dict of declaration line -> DocComment."""

    def __init__(self, comments=None):
        self.comments = comments or {}
        self.lookups = []

    def javadoc_before(self, line):
        self.lookups.append(line)
        return self.comments.get(line)


@pytest.fixture
def sample_source() -> str:
    return SAMPLE_SOURCE


@pytest.fixture
def stub_comments() -> Callable[..., StubComments]:
    """Factory for comment indexes: stub_comments({10: DocComment(...)})."""
    return StubComments


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """
    Create a small Java project with a .git marker.

    Returns:
        Path to the project root
    """
    (tmp_path / ".git").mkdir()
    src = tmp_path / "src" / "demo"
    src.mkdir(parents=True)

    (src / "Documented.java").write_text(
        textwrap.dedent(
            """\
            package demo;

            /**
             * Documented type.
             * @author Jane Doe
             * @version 1.2
             */
            public class Documented {
            }
            """
        ),
        encoding="utf-8",
    )
    (src / "Bare.java").write_text(
        textwrap.dedent(
            """\
            package demo;

            public interface Bare {
                void run();
            }
            """
        ),
        encoding="utf-8",
    )
    (src / "Drafty.java").write_text(
        textwrap.dedent(
            """\
            package demo;

            /**
             * @version draft
             * @incomplete needs review
             */
            enum Drafty { ONE, TWO }
            """
        ),
        encoding="utf-8",
    )
    (src / "notes.txt").write_text("@author nobody\n", encoding="utf-8")
    return tmp_path
