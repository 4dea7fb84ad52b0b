import json

import pytest

from dnsresolve import main as cli


@pytest.fixture
def run(monkeypatch, tmp_path, example_client):
    created = []

    def fake_client(timeout, nameservers):
        example_client.timeout = timeout
        example_client.nameservers = nameservers or []
        created.append(example_client)
        return example_client

    monkeypatch.setattr(cli, "DNSClient", fake_client)
    log_file = tmp_path / "resolver.log"

    def _run(*argv):
        return cli.main([*argv, "--log-file", str(log_file), "--no-color"])

    _run.client = example_client
    _run.log_file = log_file
    return _run


def test_single_domain(run, capsys):
    assert run("example.com") == 0
    out = capsys.readouterr().out
    assert "DNS Records for example.com:" in out
    assert "A Records:" in out
    assert " - mail.example.com (Priority: 10)" in out


def test_json_output(run, capsys):
    assert run("example.com", "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0]["query"] == "example.com"
    assert data[0]["records"]["NS"] == ["a.iana-servers.net", "b.iana-servers.net"]


def test_ip_argument_is_reversed(run, capsys):
    run.client.data["ptr"] = ["host.example.net"]
    assert run("192.0.2.7") == 0
    out = capsys.readouterr().out
    assert "Reverse DNS for 192.0.2.7:" in out
    assert " - host.example.net" in out
    assert run.client.calls["ip"] == 0


def test_reverse_without_hostnames(run, capsys):
    assert run("2001:db8::1") == 0
    assert "No hostnames found" in capsys.readouterr().out


def test_batch(run, capsys, tmp_path):
    path = tmp_path / "domains.txt"
    path.write_text("example.com\nexample.org\n\nexample.com\n", encoding="utf-8")
    assert run("--file", str(path), "-p", "2") == 0
    out = capsys.readouterr().out
    assert out.count("DNS Records for") == 3
    assert "Resolving 3 domains" in run.log_file.read_text(encoding="utf-8")


def test_batch_missing_file(run, capsys, tmp_path):
    assert run("--file", str(tmp_path / "nope.txt")) == 1
    assert "Error reading file" in capsys.readouterr().err
    assert run.client.calls["ip"] == 0


def test_server_option(run):
    assert run("example.com", "--server", "9.9.9.9", "-t", "1") == 0
    assert run.client.nameservers == ["9.9.9.9"]
    assert run.client.timeout == 1.0


def test_server_must_be_ip(run):
    with pytest.raises(SystemExit) as exc:
        run("example.com", "--server", "dns.example")
    assert exc.value.code == 2


def test_target_required(run):
    with pytest.raises(SystemExit) as exc:
        run()
    assert exc.value.code == 2


def test_markdown_report(run, capsys, tmp_path):
    report = tmp_path / "report.md"
    assert run("example.com", "-md", str(report)) == 0
    assert "Report saved" in capsys.readouterr().err
    content = report.read_text(encoding="utf-8")
    assert "## example.com" in content
    assert "| **MX** | `mail.example.com (Priority: 10)` |" in content
