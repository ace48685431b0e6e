"""
Error taxonomy
──────────────
ValidationError       input rejected at the boundary, engine never runs
ExtractionError       no usable text could be read from an uploaded document
DegenerateInputError  aggregation guard (all weights zero), aborts the analysis
LocalizationMiss      a sentence could not be found in the original text;
                      caught by the section scorer, the sentence is skipped
StorageError          persistence failed; logged, never invalidates a result
ConfigError           an environment setting could not be parsed
"""


class PlumeError(Exception):
    """Base class for every error raised by plume."""


class ValidationError(PlumeError):
    pass


class ExtractionError(PlumeError):
    pass


class DegenerateInputError(PlumeError):
    pass


class LocalizationMiss(PlumeError):
    def __init__(self, sentence: str, cursor: int):
        super().__init__(f"Sentence not found from offset {cursor}: {sentence[:40]!r}")
        self.sentence = sentence
        self.cursor = cursor


class StorageError(PlumeError):
    pass


class ConfigError(PlumeError):
    pass
