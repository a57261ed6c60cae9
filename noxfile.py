import nox


@nox.session
def build(session):
    """Build the sdist and wheel."""
    session.install("build")
    session.run("python", "-m", "build")


@nox.session
def test(session):
    """Run Python tests using pytest."""
    session.install("-e", ".[test]")
    session.run("pytest", "tests")


@nox.session
def lint(session):
    """Lint Python code."""
    session.install("ruff", "black")
    session.run("ruff", "check")
    session.run("black", "--check", ".")
