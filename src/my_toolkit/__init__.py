"""my-toolkit: scaffold Bazel workspaces and starter projects."""
