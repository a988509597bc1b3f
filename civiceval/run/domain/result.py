"""PipelineResult — what a comparison run hands back to its caller."""

from pydantic import BaseModel

from civiceval.aggregation.domain.output import ComparisonOutput


class PipelineResult(BaseModel, frozen=True):
    """The in-memory document plus the file name it was saved under.

    ``file_name`` is None when persistence failed; the run itself still succeeded.
    """

    data: ComparisonOutput
    file_name: str | None
