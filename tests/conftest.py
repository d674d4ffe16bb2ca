"""Pytest configuration and shared fixtures for all tests."""

import textwrap

import pytest

from tooling_support._extraction import ExternalModuleDependency, ProjectDependency
from tooling_support._host import InMemoryProject


@pytest.fixture
def root_project():
    """Root project of a primary build with one child, ``:squareTest``."""
    root = InMemoryProject("root")
    root.child("squareTest")
    return root


@pytest.fixture
def test_config(root_project):
    """Resolvable ``testConfig`` of the root project with two external modules."""
    configuration = root_project.create_configuration("testConfig")
    configuration.add_dependency(ExternalModuleDependency(group="com.squareup", name="foo"))
    configuration.add_dependency(ExternalModuleDependency(group="com.squareup", name="bar"))
    return configuration


@pytest.fixture
def included_build():
    """Root project of an included build named ``includeBuild`` containing ``:project:path``."""
    included = InMemoryProject("includeBuild", build_name="includeBuild")
    included.child("project").child("path")
    return included


@pytest.fixture
def project_dependency(root_project):
    return ProjectDependency(root_project.find_project(":squareTest"))


@pytest.fixture
def build_file(tmp_path):
    """YAML build description with an app, a library and an included build."""
    path = tmp_path / "build.yml"
    path.write_text(
        textwrap.dedent(
            """
            name: root
            projects:
              - name: app
                configurations:
                  implementation:
                    resolvable: false
                    dependencies:
                      - com.squareup:foo:1.0
                      - ":bar"
                      - project: ":lib"
                  runtimeClasspath:
                    dependencies:
                      - com.squareup:foo:1.0
                      - project: ":lib"
                      - project: ":project:path"
                        build: includeBuild
              - name: lib
            included_builds:
              - name: includeBuild
                projects:
                  - name: project
                    projects:
                      - name: path
            """
        )
    )
    return path
