from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def smoke(c):
    c.run("value-hierarchy --version")
    c.run("value-hierarchy guide")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
    smoke(c)
