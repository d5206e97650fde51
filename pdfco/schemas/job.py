"""
Wire schemas for async job handling.

These mirror the JSON returned by the job submission and job status
endpoints. Unknown fields are kept so the raw record can be returned as-is.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

STATUS_WORKING = "working"
STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"
STATUS_ABORTED = "aborted"
STATUS_UNKNOWN = "unknown"

# States the job status endpoint reports; anything else is an error body
JOB_STATES = frozenset({STATUS_WORKING, STATUS_SUCCESS, STATUS_FAILED, STATUS_ABORTED, STATUS_UNKNOWN})


class JobAcceptance(BaseModel):
    """Submission response for a request sent with async=true."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    job_id: str = Field(alias="jobId", description="Handle used to query job status")
    url: Optional[str] = Field(default=None, description="Where the result will be available")


class JobStatusRecord(BaseModel):
    """One response of the job status endpoint."""

    model_config = ConfigDict(extra="allow")

    status: str = Field(default="", description="working, success or failed")
    progress: Optional[float] = Field(default=None, description="Percent complete, if reported")
    url: Optional[str] = Field(default=None, description="Result URL on success")
    message: Optional[str] = Field(default=None, description="Error string on failure")
    credits: Optional[float] = Field(default=None, description="Credits consumed")
