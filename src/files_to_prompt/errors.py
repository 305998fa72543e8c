# src/files_to_prompt/errors.py


class FilesToPromptError(Exception): ...


class PathNotFoundError(FilesToPromptError): ...


class UnreadableFileError(FilesToPromptError): ...


class BinaryContentError(FilesToPromptError): ...


class OutputError(FilesToPromptError): ...
