import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

# Rebuilt per interpreter; the poetry wheel cache may hold a build for another Python.
_C_EXT_PACKAGES = ["psycopg2"]


def _install(session: nox.Session) -> None:
    session.run("poetry", "install", "--with", "test", "--all-extras", external=True)
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_C_EXT_PACKAGES)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the whole suite."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregates and value objects only; no store involved."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_workflow(session: nox.Session) -> None:
    """Payment workflow through commands, stores and behaviour scenarios."""
    _install(session)
    session.run("pytest", "-m", "application or integration or bdd", *session.posargs)
