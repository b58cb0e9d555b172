"""Project kinds: the closed set of project layouts the toolkit knows how to build.

Each kind knows how to materialize a fresh skeleton, how to wire a tree of its
kind into Bazel, and which marker files identify it in an existing tree.
Detection walks KINDS in order and the first kind with a matching marker wins.
"""

import os
from typing import Dict, List, Optional, Tuple

import click

from my_toolkit.errors import fail
from my_toolkit.materializer import ensure_file
from my_toolkit.templates.template_renderer import read_resource, render_template
from my_toolkit.workspace.manifest import bazel_name

BUILD_DESCRIPTOR = "BUILD.bazel"
BUILD_DESCRIPTOR_NAMES = ("BUILD.bazel", "BUILD")


def find_build_descriptor(directory: str) -> Optional[str]:
    """Return the path of the build descriptor in directory, or None."""
    for filename in BUILD_DESCRIPTOR_NAMES:
        path = os.path.join(directory, filename)
        if os.path.isfile(path):
            return path
    return None


class ProjectKind:
    """Base strategy for one kind of project."""

    name: str = ""
    description: str = ""
    markers: Tuple[str, ...] = ()
    extra_flags: Dict[str, str] = {}
    descriptor_template: str = ""
    layout: Dict[str, str] = {}

    def detect(self, directory: str) -> Optional[str]:
        """Return the first marker file present in directory, or None."""
        for marker in self.markers:
            if os.path.isfile(os.path.join(directory, marker)):
                return marker
        return None

    def validate_variant(self, variant: Optional[str]) -> None:
        if variant is not None and variant not in self.extra_flags:
            accepted = ", ".join(sorted(self.extra_flags)) or "none"
            raise click.UsageError(
                f"'{self.name}' does not accept {variant} (accepted flags: {accepted})"
            )

    def materialize(self, project_dir: str, project_name: str,
                    variant: Optional[str], runner) -> List[str]:
        """Write the kind's template files into project_dir.

        Returns:
            Paths of the files written; they still carry the name placeholder.
        """
        written = []
        for dest, resource in self.layout.items():
            path = os.path.join(project_dir, dest)
            content = read_resource(f"skeletons/{self.name}/{resource}")
            if ensure_file(path, content):
                written.append(path)
        return written

    def build_descriptor(self, project_name: str, marker: Optional[str] = None) -> str:
        return render_template(self.descriptor_template, name=bazel_name(project_name))

    def post_scaffold_command(self, variant: Optional[str]) -> Optional[List[str]]:
        """Optional tool step requested by the extra flag, run inside the project."""
        return None


_JVM_BUILDS = {
    "build.gradle.kts": ("gradle --quiet jar", "build/libs/*.jar"),
    "build.gradle": ("gradle --quiet jar", "build/libs/*.jar"),
    "pom.xml": ("mvn --quiet package -DskipTests", "target/*.jar"),
}


class GradleKind(ProjectKind):
    name = "gradle"
    description = "Kotlin/JVM project built with Gradle"
    markers = ("build.gradle.kts", "build.gradle", "pom.xml")
    extra_flags = {"--wrapper": "generate the Gradle wrapper"}
    descriptor_template = "gradle_BUILD.bazel.j2"
    layout = {
        "settings.gradle.kts": "settings.gradle.kts.tmpl",
        "build.gradle.kts": "build.gradle.kts.tmpl",
        "src/main/kotlin/Main.kt": "Main.kt.tmpl",
        "src/test/kotlin/MainTest.kt": "MainTest.kt.tmpl",
        ".gitignore": "gitignore.tmpl",
        "README.md": "README.md.tmpl",
    }

    def build_descriptor(self, project_name, marker=None):
        build_file = marker or self.markers[0]
        build_cmd, jar_glob = _JVM_BUILDS[build_file]
        return render_template(
            self.descriptor_template,
            name=bazel_name(project_name),
            build_file=build_file,
            build_cmd=build_cmd,
            jar_glob=jar_glob,
        )

    def post_scaffold_command(self, variant):
        if variant == "--wrapper":
            return ["gradle", "wrapper"]
        return None


class CdkKind(ProjectKind):
    name = "cdk"
    description = "AWS CDK infrastructure project in TypeScript"
    markers = ("package.json",)
    extra_flags = {"--install": "run npm install after scaffolding"}
    descriptor_template = "cdk_BUILD.bazel.j2"
    layout = {
        "package.json": "package.json.tmpl",
        "tsconfig.json": "tsconfig.json.tmpl",
        "cdk.json": "cdk.json.tmpl",
        "bin/app.ts": "app.ts.tmpl",
        "lib/stack.ts": "stack.ts.tmpl",
        ".gitignore": "gitignore.tmpl",
        "README.md": "README.md.tmpl",
    }

    def post_scaffold_command(self, variant):
        if variant == "--install":
            return ["npm", "install"]
        return None


class ReactNativeKind(ProjectKind):
    """Mobile app generated by an external scaffolding CLI.

    It has no markers of its own: a package.json tree is claimed by CdkKind first.
    """

    name = "react-native"
    description = "React Native mobile app"
    extra_flags = {"--expo": "scaffold with create-expo-app instead of the React Native CLI"}
    descriptor_template = "react_native_BUILD.bazel.j2"

    def scaffold_command(self, project_name: str, variant: Optional[str]) -> List[str]:
        if variant == "--expo":
            return ["npx", "--yes", "create-expo-app@latest", project_name]
        return ["npx", "--yes", "@react-native-community/cli@latest", "init", project_name]

    def materialize(self, project_dir, project_name, variant, runner):
        parent = os.path.dirname(os.path.abspath(project_dir))
        cmd = self.scaffold_command(project_name, variant)
        result = runner.run(cmd, cwd=parent)
        if result.returncode != 0:
            fail(f"{' '.join(cmd[:3])} exited with code {result.returncode}")
        if not os.path.isdir(project_dir):
            fail(f"{cmd[2]} did not create {project_dir}")
        return []


KINDS = (GradleKind(), CdkKind(), ReactNativeKind())


def kind_names() -> List[str]:
    return [kind.name for kind in KINDS]


def kind_named(name: str) -> ProjectKind:
    for kind in KINDS:
        if kind.name == name:
            return kind
    raise click.UsageError(f"Unknown project kind: {name} (expected one of: {', '.join(kind_names())})")


def detect_kind(directory: str) -> Tuple[Optional[ProjectKind], Optional[str]]:
    """Return (kind, marker) for the first kind whose marker is in directory."""
    for kind in KINDS:
        marker = kind.detect(directory)
        if marker:
            return kind, marker
    return None, None
