"""Exceptions raised by the CLI and deployed-output lookup."""


class Chapter3InfraError(Exception):
    """Base class for errors raised outside of CDK synthesis."""


class AssetDirectoryError(Chapter3InfraError):
    """A local asset directory is missing or incomplete."""


class StackNotFoundError(Chapter3InfraError):
    """The CloudFormation stack has not been deployed."""

    def __init__(self, stack_name: str):
        super().__init__(f"Stack '{stack_name}' does not exist")
        self.stack_name = stack_name


class StackOutputsError(Chapter3InfraError):
    """The deployed stack is missing an expected output."""
