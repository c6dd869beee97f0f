import pytest

from dal import DAL, LocalStorage
from feed import build_parser, run


@pytest.fixture
def storage_path(tmp_path):
  return str(tmp_path / "storage.json")


async def _run(*argv):
  return await run(build_parser().parse_args(list(argv)))


@pytest.mark.asyncio
async def test_seed_then_list(storage_path, write_json, capsys):
  source = write_json([
    {"id": "1", "name": "Fido", "type": "dog", "region": "Bangkok", "createdAt": 2},
    {"id": "2", "name": "Mali", "type": "แมว", "region": "South", "createdAt": 1},
  ])

  assert await _run("--storage", storage_path, "--seed", source) == 0
  assert await _run("--storage", storage_path, "--list", "--type", "cat") == 0

  out = capsys.readouterr().out
  assert "Loaded demo posts: 2" in out
  assert "1 list" in out
  assert "Mali" in out
  assert "Fido" not in out.split("1 list")[1]


@pytest.mark.asyncio
async def test_add_and_delete(storage_path, tmp_path, make_png, capsys):
  image = tmp_path / "fido.png"
  image.write_bytes(make_png())

  code = await _run(
    "--storage", storage_path, "--add", "--name", "Fido", "--pet-type", "หมา",
    "--pet-region", "Mars", "--desc", "Friendly", "--image", str(image),
  )
  assert code == 0

  records = DAL(LocalStorage(storage_path)).listings.read()
  assert records[0]["type"] == "หมา"
  assert "(Dog, Empty)" in capsys.readouterr().out

  assert await _run("--storage", storage_path, "--delete", records[0]["id"], "--yes") == 0
  assert DAL(LocalStorage(storage_path)).listings.read() == []


@pytest.mark.asyncio
async def test_add_without_image_fails(storage_path, capsys):
  assert await _run("--storage", storage_path, "--add", "--name", "Fido") == 1
  assert "select an image" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_delete_demo_post_is_refused(storage_path, write_json, capsys):
  await _run("--storage", storage_path, "--seed", write_json([{"id": "1", "name": "Fido"}]))

  assert await _run("--storage", storage_path, "--delete", "1", "--yes") == 1
  assert "demo post" in capsys.readouterr().out
  assert len(DAL(LocalStorage(storage_path)).listings.read()) == 1


@pytest.mark.asyncio
async def test_shelters_by_province(storage_path, write_json, capsys):
  source = write_json([
    {"id": "1", "name": "Soi Dog", "province": "Phuket"},
    {"id": "2", "name": "Paws Home", "province": "Chiang Mai"},
  ], name="shelters.json")

  assert await _run("--storage", storage_path, "--shelters", source, "--province", "Chiang Mai") == 0

  out = capsys.readouterr().out
  assert "Provinces: Chiang Mai, Phuket" in out
  assert "Paws Home" in out
  assert "Soi Dog" not in out


@pytest.mark.asyncio
async def test_contact_and_messages(storage_path, capsys):
  code = await _run(
    "--storage", storage_path, "--contact", "--name", "Somchai", "--email", "s@example.com",
    "--subject", "Hello", "--message", "Hi there", "--topic", "general", "--consent",
  )
  assert code == 0
  assert await _run("--storage", storage_path, "--messages", "--report") == 0

  out = capsys.readouterr().out
  assert "Message sent successfully" in out
  assert "[general] Hello - Somchai <s@example.com>" in out
  assert "Messages (happyPaws.contactMessages): 1" in out


@pytest.mark.asyncio
async def test_contact_without_consent_fails(storage_path):
  code = await _run(
    "--storage", storage_path, "--contact", "--name", "Somchai", "--email", "s@example.com",
    "--subject", "Hello", "--message", "Hi there", "--topic", "general",
  )
  assert code == 1


@pytest.mark.asyncio
async def test_unwritable_storage_reports_error(tmp_path, capsys):
  path = str(tmp_path / "missing_dir" / "storage.json")
  code = await _run(
    "--storage", path, "--contact", "--name", "Somchai", "--email", "s@example.com",
    "--subject", "Hello", "--message", "Hi there", "--topic", "general", "--consent",
  )

  assert code == 1
  assert "Error saving storage file" in capsys.readouterr().out
