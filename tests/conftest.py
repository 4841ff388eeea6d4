"""Shared fixtures: a small on-disk site that satisfies the homepage counts."""

from pathlib import Path

import pytest

from folio.config import SiteConfig

ROOT = Path(__file__).resolve().parent.parent


def write_doc(directory: Path, name: str, frontmatter: str, body: str = "Some body text.") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(f"---\n{frontmatter.strip()}\n---\n\n{body}\n", encoding="utf-8")
    return path


def populate(content: Path) -> None:
    blog = content / "blog"
    write_doc(blog, "first-post.md", 'title: "First post"\ndescription: "The first one."\ndate: 2024-01-10',
              "## Intro\n\nHello [home](/) and [python](https://www.python.org/).\n\n## Outro\n\nBye.")
    write_doc(blog, "second-post.md", 'title: "Second post"\ndescription: "The second one."\ndate: 2024-02-10')
    write_doc(blog, "third-post.mdx", 'title: "Third post"\ndescription: "The third one."\ndate: 2023-12-01',
              'import Thing from "./Thing.astro";\n\nMDX body.')
    write_doc(blog, "secret.md", 'title: "Secret"\ndescription: "Not yet."\ndate: 2024-03-01\ndraft: true')

    work = content / "work"
    write_doc(work, "current.md", 'company: "Now Inc"\nrole: "Engineer"\ndateStart: 2023-01-01\ndateEnd: Current')
    write_doc(work, "previous.md", 'company: "Before Ltd"\nrole: "Developer"\ndateStart: 2020-01-01\ndateEnd: 2022-12-31')

    projects = content / "projects"
    for i, day in enumerate(("2024-01-01", "2024-02-01", "2024-03-01"), start=1):
        write_doc(
            projects,
            f"project-{i}.md",
            f'title: "Project {i}"\ndescription: "Project number {i}."\ndate: {day}\n'
            f'repoURL: "https://github.com/example/project-{i}"',
        )


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    content = tmp_path / "content"
    populate(content)
    public = tmp_path / "public"
    public.mkdir()
    (public / "favicon.svg").write_text("<svg></svg>", encoding="utf-8")
    return SiteConfig(
        site="https://example.github.io/",
        base="/site/",
        content_dir=content,
        public_dir=public,
        out_dir=tmp_path / "dist",
    )


@pytest.fixture
def doc_writer():
    """Return the helper that writes one front-matter document."""
    return write_doc
