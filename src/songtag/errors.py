class SongProcessingError(RuntimeError):
    """Base error for every stage of the song pipeline."""


class UnsupportedFormat(SongProcessingError):
    pass


class PreprocessFailure(SongProcessingError):
    """Trimming failed, produced no file, or produced a clip that is too short."""


class NotPreprocessed(SongProcessingError):
    pass


class RecognitionFailure(SongProcessingError):
    """The recognition tool failed, its output was unreadable, or it found no match."""


class NoMetadataAvailable(SongProcessingError):
    pass


class TaggingFailure(SongProcessingError):
    pass


class ToolError(RuntimeError):
    """An external command could not be run or exited non-zero.

    Raised by songtag.io and translated at the stage boundary; callers of
    SongProcessor never see it.
    """

    def __init__(self, argv, returncode=None, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{self.argv[0] if self.argv else '?'} exited with {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg)


class ConfigError(ValueError):
    pass
