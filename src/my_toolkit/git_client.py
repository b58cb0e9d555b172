"""GitClient: wraps GitPython for cloning dependencies and committing skeletons."""

from git import Repo


class GitClient:
    """Clone and init/commit operations used by the workspace and skeleton commands.

    Errors surface as git.exc.GitCommandError (or GitError subclasses); callers
    decide whether they are fatal.
    """

    def clone(self, url: str, dest: str) -> None:
        Repo.clone_from(url, dest)

    def init(self, directory: str) -> Repo:
        return Repo.init(directory)

    def commit_all(self, directory: str, message: str) -> str:
        """Stage everything under directory and commit it.

        Uses the git CLI for the commit so that an empty tree or a missing
        user identity fails instead of producing a commit.

        Returns:
            The new HEAD SHA.
        """
        repo = Repo(directory)
        repo.git.add(A=True)
        repo.git.commit("-m", message)
        return repo.head.commit.hexsha
