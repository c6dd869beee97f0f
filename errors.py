"""
Error types for the Happy Paws feed

Every error carries a user-facing message. None of them is fatal to the
process: storage and dataset errors are recovered as empty collections,
the rest are surfaced to whoever triggered the operation.
"""


class FeedError(Exception):
  """Base class for all feed errors"""
  message = "Something went wrong."

  def __init__(self, message: str = None):
    if message:
      self.message = message
    super().__init__(self.message)


class StorageCorruptError(FeedError):
  """Stored slot could not be parsed as a list of records"""
  message = "Stored data is unreadable."


class QuotaExceededError(FeedError):
  """The storage medium rejected a write because it is full"""
  message = "Storage is full on this device."


class StorageUnavailableError(FeedError):
  """The storage file could not be written"""
  message = "Could not save to storage on this device."


class ValidationError(FeedError):
  """A required form field is missing or invalid"""
  message = "Please input name/type/region/description and select an image"


class ProtectedRecordError(FeedError):
  """Delete targeted a read-only demo record"""
  message = "This is a demo post and cannot be deleted."

  def __init__(self, record_id: str, message: str = None):
    self.record_id = record_id
    super().__init__(message)


class FetchFailedError(FeedError):
  """Dataset source unreachable or returned a non-OK response"""
  message = "Data loading failed."


class MalformedDatasetError(FeedError):
  """Dataset payload is not a JSON list of records"""
  message = "Dataset is not a list of records."


class ImageProcessingError(FeedError):
  """The uploaded image could not be decoded or re-encoded"""
  message = "Could not process the image on this device."


class OperationInProgressError(FeedError):
  """Another create is still running"""
  message = "Please wait, still posting..."
