"""
Image handling for new posts
v1.0.0

Uploads are embedded in the store as data URLs, so they are shrunk
first: bounded width, lossy JPEG re-encode. Records without an image
render the inline "No Image" placeholder.
"""
import asyncio
import base64
import io
import mimetypes
from dataclasses import dataclass
from urllib.parse import quote

from PIL import Image, ImageOps, UnidentifiedImageError

from config import IMAGE_MAX_WIDTH, IMAGE_QUALITY
from errors import ImageProcessingError


_PLACEHOLDER_SVG = (
  '<svg xmlns="http://www.w3.org/2000/svg" width="800" height="520">'
  '<rect width="100%" height="100%" fill="#ddd"/>'
  '<text x="50%" y="50%" font-size="28" text-anchor="middle" fill="#666" dy=".3em">No Image</text>'
  '</svg>'
)

PLACEHOLDER_IMAGE = "data:image/svg+xml;charset=UTF-8," + quote(_PLACEHOLDER_SVG, safe="~()*!.'")


@dataclass
class ImageUpload:
  """Raw bytes of an uploaded file"""
  data: bytes
  filename: str = ""
  content_type: str = ""

  @property
  def size(self) -> int:
    return len(self.data or b"")

  def guess_content_type(self) -> str:
    if self.content_type:
      return self.content_type
    guessed, _ = mimetypes.guess_type(self.filename or "")
    return guessed or "application/octet-stream"


def to_data_url(upload: ImageUpload) -> str:
  """Embed an upload as-is"""
  encoded = base64.b64encode(upload.data).decode("ascii")
  return f"data:{upload.guess_content_type()};base64,{encoded}"


def compress_image(data: bytes, max_width: int = IMAGE_MAX_WIDTH, quality: float = IMAGE_QUALITY) -> str:
  """
  Scale an image down to max_width (never up) and re-encode as JPEG.

  Returns a data URL. Raises ImageProcessingError if the bytes are not
  a readable image or decode to more pixels than Pillow allows.
  """
  try:
    with Image.open(io.BytesIO(data)) as img:
      img = ImageOps.exif_transpose(img)
      if img.mode != "RGB":
        img = img.convert("RGB")

      width, height = img.size
      scale = min(1.0, max_width / (width or max_width))
      if scale < 1.0:
        size = (round(width * scale), round(height * scale))
        img = img.resize(size, Image.Resampling.LANCZOS)

      out = io.BytesIO()
      img.save(out, format="JPEG", quality=int(round(quality * 100)))
  except (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    Image.DecompressionBombWarning,
    OSError,
    ValueError,
  ) as e:
    raise ImageProcessingError(f"Could not process the image on this device. ({e})")

  encoded = base64.b64encode(out.getvalue()).decode("ascii")
  return f"data:image/jpeg;base64,{encoded}"


async def compress_image_async(data: bytes, max_width: int = IMAGE_MAX_WIDTH, quality: float = IMAGE_QUALITY) -> str:
  """compress_image off the event loop"""
  return await asyncio.to_thread(compress_image, data, max_width, quality)
