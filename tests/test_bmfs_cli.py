import io

import pytest

from bareos.bmfs import BmfsDisk, initialize
from bareos.bmfs_cli import main


@pytest.fixture
def disk_path(tmp_path):
    path = tmp_path / "disk.img"
    initialize(path, "6M")
    return path


def test_no_arguments_prints_usage(capsys):
    assert main([]) == 0
    assert "Usage: bmfs disk function file" in capsys.readouterr().out


def test_initialize_needs_size(capsys, tmp_path):
    assert main([str(tmp_path / "d.img"), "initialize"]) == 1
    assert "size [mbr_file]" in capsys.readouterr().out


def test_initialize(capsys, tmp_path):
    path = tmp_path / "d.img"
    assert main([str(path), "INITIALIZE", "6M"]) == 0
    assert "Disk initialization complete." in capsys.readouterr().out
    assert path.stat().st_size == 6291456


def test_initialize_bad_size(capsys, tmp_path):
    assert main([str(tmp_path / "d.img"), "initialize", "abc"]) == 1
    assert "Error: A numeric disk size must be specified" in capsys.readouterr().out


def test_missing_disk(capsys, tmp_path):
    assert main([str(tmp_path / "none.img"), "list"]) == 0
    assert "Error: Unable to open disk" in capsys.readouterr().out


def test_unformatted_disk(capsys, tmp_path):
    path = tmp_path / "raw.img"
    path.write_bytes(bytes(8192))
    main([str(path), "list"])
    assert "Not a valid BMFS drive" in capsys.readouterr().out
    main([str(path), "format"])
    assert "Format complete." in capsys.readouterr().out
    with BmfsDisk(path) as disk:
        assert disk.is_formatted


def test_create_and_list(capsys, disk_path):
    main([str(disk_path), "create", "hello", "1"])
    assert "Complete" in capsys.readouterr().out
    main([str(disk_path), "LIST"])
    out = capsys.readouterr().out
    assert "Disk Size: 6 MiB" in out
    assert "hello" in out


def test_create_invalid_size(capsys, disk_path):
    main([str(disk_path), "create", "hello", "0"])
    assert "Error: Invalid file size." in capsys.readouterr().out
    with BmfsDisk(disk_path) as disk:
        assert disk.entries() == []


def test_create_prompts_for_size(capsys, disk_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("2\n"))
    main([str(disk_path), "create", "prompted"])
    assert "Maximum file size in MiB: " in capsys.readouterr().out
    with BmfsDisk(disk_path) as disk:
        assert disk.find("prompted") is not None


def test_create_duplicate(capsys, disk_path):
    main([str(disk_path), "create", "a", "1"])
    capsys.readouterr()
    main([str(disk_path), "create", "a", "1"])
    assert "Error: File already exists." in capsys.readouterr().out


def test_create_without_name(capsys, disk_path):
    main([str(disk_path), "create"])
    assert "Error: File name not specified." in capsys.readouterr().out


def test_format_requires_force(capsys, disk_path):
    main([str(disk_path), "create", "a", "1"])
    capsys.readouterr()
    main([str(disk_path), "format"])
    assert "Format aborted!" in capsys.readouterr().out
    main([str(disk_path), "format", "/force"])
    assert "Format complete." in capsys.readouterr().out
    with BmfsDisk(disk_path) as disk:
        assert disk.entries() == []


def test_write_read_delete(capsys, disk_path, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    payload = b"This is sample data.\x00"
    (tmp_path / "data.bin").write_bytes(payload)
    main([str(disk_path), "create", "data.bin", "2"])
    main([str(disk_path), "write", "data.bin"])
    (tmp_path / "data.bin").unlink()
    main([str(disk_path), "read", "data.bin"])
    assert (tmp_path / "data.bin").read_bytes() == payload
    main([str(disk_path), "delete", "data.bin"])
    with BmfsDisk(disk_path) as disk:
        assert disk.find("data.bin") is None


def test_read_missing_file(capsys, disk_path):
    main([str(disk_path), "read", "ghost"])
    assert "Error: File not found in BMFS." in capsys.readouterr().out


def test_unknown_command(capsys, disk_path):
    assert main([str(disk_path), "frobnicate"]) == 0
    assert "Unknown command" in capsys.readouterr().out