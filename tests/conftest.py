"""Pytest configuration and fixtures."""
import io
import json

import pytest
from PIL import Image

from dal import DAL, LocalStorage
from images import ImageUpload


@pytest.fixture
def storage():
  """In-memory storage with the default quota"""
  return LocalStorage()


@pytest.fixture
def dal(storage):
  return DAL(storage)


@pytest.fixture
def store(dal):
  """The pet listings slot"""
  return dal.listings


@pytest.fixture
def make_png():
  """Build PNG bytes of the given size"""
  def _make(width=40, height=30, color="red"):
    out = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(out, format="PNG")
    return out.getvalue()
  return _make


@pytest.fixture
def upload(make_png):
  return ImageUpload(data=make_png(), filename="pet.png")


@pytest.fixture
def write_json(tmp_path):
  """Write a JSON document to a temp file and return its path"""
  def _write(data, name="posts.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)
  return _write


def make_records(count, **overrides):
  """Raw stored records with increasing createdAt"""
  records = []
  for i in range(count):
    record = {
      "id": f"p{i}",
      "name": f"Pet {i}",
      "type": "dog",
      "region": "Bangkok",
      "desc": "",
      "image": "",
      "createdAt": i,
      "isDemo": False,
    }
    record.update(overrides)
    records.append(record)
  return records
