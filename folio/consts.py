from folio.models.site import Metadata, Site, Social, Socials

SITE = Site(
    NAME="Thiago Willecke | dev",
    EMAIL="thiagogwillecke@gmail.com",
    NUM_POSTS_ON_HOMEPAGE=3,
    NUM_WORKS_ON_HOMEPAGE=2,
    NUM_PROJECTS_ON_HOMEPAGE=3,
)

HOME = Metadata(
    TITLE="Home",
    DESCRIPTION="A blog about my findings and experiences as developer.",
)

BLOG = Metadata(
    TITLE="Blog",
    DESCRIPTION="A collection of articles on topics I am passionate about.",
)

WORK = Metadata(
    TITLE="Work",
    DESCRIPTION="Where I have worked and what I have done.",
)

PROJECTS = Metadata(
    TITLE="Projects",
    DESCRIPTION="A collection of my projects, with links to repositories.",
)

SOCIALS: Socials = [
    Social(NAME="github", HREF="https://github.com/twillecke"),
    Social(NAME="linkedin", HREF="https://www.linkedin.com/in/thiago-guedes-willecke/"),
]
