"""
Tests for DWSClient and the endpoint services.

The session's ``send`` is replaced with a mock so every request the
services make can be inspected as a PreparedRequest.
"""

import io
import json
import os
import random
import tempfile
import unittest
from unittest.mock import MagicMock

import requests

from bscli.client import ClientConfig, DWSClient
from bscli.config import DEFAULT_USER, REQUEST_TIMEOUT
from bscli.exceptions import APIError
from bscli.result import ListResult, ObjectResult, ScalarResult
from bscli.services.storage import FileInfo, files_from_result, parent_api_path, to_api_path
from bscli.session import build_session

CHALLENGE = 'Digest realm="BrightSign", nonce="abc123", qop="auth"'


def _response(status=200, body=b'{"data": {"result": {}}}', headers=None):
    resp = requests.Response()
    resp.status_code = status
    resp.headers.update(headers or {})
    resp.raw = io.BytesIO(body)
    return resp


def _envelope(result):
    return json.dumps({"data": {"result": result}}).encode()


class _ClientTestCase(unittest.TestCase):
    def setUp(self):
        self.session = build_session()
        self.session.send = MagicMock(side_effect=lambda *a, **kw: _response())
        self.client = DWSClient(
            ClientConfig(host="192.168.1.100", password="secret"),
            session=self.session,
            rng=random.Random(1),
        )

    def sent(self, index=-1):
        return self.session.send.call_args_list[index].args[0]

    def reply(self, *responses):
        self.session.send.side_effect = list(responses)


class TestBuildSession(unittest.TestCase):
    def test_session_has_keep_alive(self):
        self.assertEqual(build_session().headers["Connection"], "keep-alive")

    def test_session_accepts_json(self):
        self.assertEqual(build_session().headers["Accept"], "application/json")

    def test_adapter_never_retries(self):
        adapter = build_session().get_adapter("http://192.168.1.100/")
        self.assertEqual(adapter.max_retries.total, 0)
        self.assertFalse(adapter.max_retries.raise_on_status)

    def test_verify_flag(self):
        self.assertFalse(build_session(verify_ssl=False).verify)


class TestClientConfig(unittest.TestCase):
    def test_defaults(self):
        config = ClientConfig(host="player.local")
        self.assertEqual(config.username, DEFAULT_USER)
        self.assertEqual(config.timeout, REQUEST_TIMEOUT)
        self.assertFalse(config.insecure)

    def test_empty_username_falls_back(self):
        self.assertEqual(ClientConfig(host="h", username="").username, DEFAULT_USER)

    def test_host_required(self):
        with self.assertRaises(ValueError):
            ClientConfig(host="")


class TestClientSetup(unittest.TestCase):
    def test_plain_http_by_default(self):
        client = DWSClient(ClientConfig(host="192.168.1.100"))
        self.assertEqual(client.base_url, "http://192.168.1.100/api/v1")
        self.assertTrue(client.session.verify)

    def test_insecure_uses_https_without_verification(self):
        client = DWSClient(ClientConfig(host="192.168.1.100", insecure=True))
        self.assertEqual(client.base_url, "https://192.168.1.100/api/v1")
        self.assertFalse(client.session.verify)

    def test_services_attached(self):
        client = DWSClient(ClientConfig(host="h"))
        for name in ("info", "control", "storage", "diagnostics", "display", "registry", "logs", "video"):
            self.assertTrue(hasattr(client, name), name)

    def test_url_joins_path(self):
        client = DWSClient(ClientConfig(host="h"))
        self.assertEqual(client.url("info/"), "http://h/api/v1/info/")
        self.assertEqual(client.url("/info/"), "http://h/api/v1/info/")

    def test_credentials_from_config(self):
        client = DWSClient(ClientConfig(host="h", username="u", password="p"))
        self.assertEqual(client.credentials.username, "u")
        self.assertEqual(client.credentials.password, "p")


class TestClientCall(_ClientTestCase):
    def test_decodes_envelope(self):
        self.reply(_response(body=_envelope({"model": "XD1034"})))
        result = self.client.info.get_info()
        self.assertIsInstance(result, ObjectResult)
        self.assertEqual(result.get("model"), "XD1034")

    def test_error_status_raises(self):
        self.reply(_response(404, b'{"error": "no such key"}'))
        with self.assertRaises(APIError) as ctx:
            self.client.registry.get_value("networking", "nope")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn("no such key", ctx.exception.body)

    def test_digest_retry_through_service(self):
        self.reply(
            _response(401, b"", {"WWW-Authenticate": CHALLENGE}),
            _response(body=_envelope(True)),
        )
        result = self.client.registry.set_value("networking", "ssh", "22")

        self.assertEqual(result, ScalarResult(True))
        self.assertEqual(self.session.send.call_count, 2)
        retry = self.sent(1)
        self.assertIn('uri="/api/v1/registry/networking/ssh/"', retry.headers["Authorization"])
        self.assertIn('username="admin"', retry.headers["Authorization"])
        self.assertEqual(json.loads(retry.body), {"value": "22"})

    def test_persistent_401_surfaces_as_api_error(self):
        self.reply(
            _response(401, b"", {"WWW-Authenticate": CHALLENGE}),
            _response(401, b"Unauthorized", {"WWW-Authenticate": CHALLENGE}),
        )
        with self.assertRaises(APIError) as ctx:
            self.client.info.get_info()
        self.assertEqual(ctx.exception.status_code, 401)


class TestServiceEndpoints(_ClientTestCase):
    """Method, path and JSON body of each endpoint."""

    CASES = [
        (lambda c: c.info.get_info(), "GET", "/api/v1/info/", None),
        (lambda c: c.info.get_health(), "GET", "/api/v1/health/", None),
        (lambda c: c.info.get_time(), "GET", "/api/v1/time/", None),
        (lambda c: c.info.set_time("2024-01-02", "10:00:00", "UTC"), "PUT", "/api/v1/time/",
         {"date": "2024-01-02", "time": "10:00:00", "timezone": "UTC"}),
        (lambda c: c.info.get_video_mode(), "GET", "/api/v1/video-mode/", None),
        (lambda c: c.info.list_apis(), "GET", "/api/v1/", None),
        (lambda c: c.control.reboot(), "PUT", "/api/v1/control/reboot/", {}),
        (lambda c: c.control.reboot(factory_reset=True), "PUT", "/api/v1/control/reboot/",
         {"factory_reset": True}),
        (lambda c: c.control.set_dws_password("pw"), "PUT", "/api/v1/control/dws-password/",
         {"password": "pw"}),
        (lambda c: c.control.set_local_dws(False), "PUT", "/api/v1/control/local-dws/",
         {"enabled": False}),
        (lambda c: c.control.snapshot(640, 360), "POST", "/api/v1/snapshot/",
         {"width": 640, "height": 360}),
        (lambda c: c.control.download_firmware("http://fw.example/os.bsfw"), "GET",
         "/api/v1/download-firmware/?url=http://fw.example/os.bsfw", None),
        (lambda c: c.registry.get_all(), "GET", "/api/v1/registry/", None),
        (lambda c: c.registry.delete_value("a", "b"), "DELETE", "/api/v1/registry/a/b/", None),
        (lambda c: c.registry.delete_section("a"), "DELETE", "/api/v1/registry/a/", None),
        (lambda c: c.registry.set_recovery_url("http://r/"), "PUT", "/api/v1/registry/recovery_url/",
         {"url": "http://r/"}),
        (lambda c: c.registry.flush(), "PUT", "/api/v1/registry/flush/", None),
        (lambda c: c.logs.get_logs(), "GET", "/api/v1/logs/", None),
        (lambda c: c.logs.set_supervisor_logging_level(3), "PUT", "/api/v1/system/supervisor/logging/",
         {"level": 3}),
        (lambda c: c.logs.set_supervisor_logging_level(9), "PUT", "/api/v1/system/supervisor/logging/",
         {"level": 2}),
        (lambda c: c.diagnostics.run(), "GET", "/api/v1/diagnostics/", None),
        (lambda c: c.diagnostics.ping("8.8.8.8"), "GET", "/api/v1/diagnostics/ping/8.8.8.8", None),
        (lambda c: c.diagnostics.dns_lookup("example.com", True), "GET",
         "/api/v1/diagnostics/dns-lookup/example.com?resolveAddress=true", None),
        (lambda c: c.diagnostics.trace_route("example.com"), "GET",
         "/api/v1/diagnostics/trace-route/example.com", None),
        (lambda c: c.diagnostics.stop_packet_capture(), "DELETE", "/api/v1/diagnostics/packet-capture/", None),
        (lambda c: c.diagnostics.set_telnet(True, 23), "PUT", "/api/v1/diagnostics/telnet/",
         {"enabled": True, "portNumber": 23}),
        (lambda c: c.diagnostics.set_ssh(True, password="pw", reboot=True), "PUT", "/api/v1/diagnostics/ssh/",
         {"enabled": True, "reboot": True, "password": "pw"}),
        (lambda c: c.display.set_brightness(80), "PUT", "/api/v1/display-control/brightness/",
         {"value": 80}),
        (lambda c: c.display.set_power_settings("standby"), "PUT", "/api/v1/display-control/power-settings/",
         {"state": "standby"}),
        (lambda c: c.display.update_firmware("/storage/sd/fw.bin"), "PUT", "/api/v1/display-control/firmware/",
         {"source": "/storage/sd/fw.bin"}),
        (lambda c: c.video.output_info(), "GET", "/api/v1/video/hdmi/output/0/", None),
        (lambda c: c.video.current_mode(), "GET", "/api/v1/video/hdmi/output/0/mode/", None),
        (lambda c: c.video.set_mode("1920x1080x60p"), "PUT", "/api/v1/video/hdmi/output/0/mode/",
         {"mode": "1920x1080x60p"}),
        (lambda c: c.video.set_power_save(True, device="1"), "PUT", "/api/v1/video/hdmi/output/1/power-save/",
         {"enabled": True}),
        (lambda c: c.video.send_cec("400D"), "POST", "/api/v1/sendCecX/", {"hexCommand": "400D"}),
        (lambda c: c.storage.delete_file("/storage/sd/old.txt"), "DELETE", "/api/v1/files/sd/old.txt", None),
        (lambda c: c.storage.format_storage("usb1"), "DELETE", "/api/v1/storage/usb1/", None),
    ]

    def test_endpoints(self):
        for call, method, path, payload in self.CASES:
            with self.subTest(path=path, method=method, payload=payload):
                self.session.send.reset_mock()
                call(self.client)
                prepared = self.sent()
                self.assertEqual(prepared.method, method)
                self.assertEqual(prepared.path_url, path)
                if payload is None:
                    self.assertIsNone(prepared.body)
                else:
                    self.assertEqual(json.loads(prepared.body), payload)
                    self.assertEqual(prepared.headers["Content-Type"], "application/json")


class TestStoragePaths(unittest.TestCase):
    def test_to_api_path(self):
        self.assertEqual(to_api_path("/storage/sd/a.txt"), "/files/sd/a.txt")
        self.assertEqual(to_api_path("storage/sd/"), "/files/sd/")

    def test_parent_api_path(self):
        self.assertEqual(parent_api_path("/storage/sd/a.txt"), "/files/sd/")
        self.assertEqual(parent_api_path("/storage/sd/media/clip.mp4"), "/files/sd/media/")
        self.assertEqual(parent_api_path("/storage/sd/media/"), "/files/sd/")


class TestFilesFromResult(unittest.TestCase):
    ENTRY = {"name": "autorun.brs", "type": "file", "size": 1024, "lastModified": "2024-01-01"}

    def test_bare_list(self):
        files = files_from_result(ListResult([self.ENTRY, {"name": "media", "type": "directory"}]))
        self.assertEqual([f.name for f in files], ["autorun.brs", "media"])
        self.assertTrue(files[1].is_dir)
        self.assertEqual(files[0].modified, "2024-01-01")

    def test_files_key(self):
        files = files_from_result(ObjectResult({"files": [self.ENTRY]}))
        self.assertEqual(files, [FileInfo.from_dict(self.ENTRY)])

    def test_single_object(self):
        self.assertEqual(files_from_result(ObjectResult(self.ENTRY))[0].size, 1024)

    def test_unrelated_object_is_empty(self):
        self.assertEqual(files_from_result(ObjectResult({"status": "ok"})), [])

    def test_scalar_rejected(self):
        with self.assertRaises(APIError):
            files_from_result(ScalarResult(None))


class TestStorageService(_ClientTestCase):
    def test_list_files(self):
        self.reply(_response(body=_envelope({"files": [{"name": "a.txt", "size": 3}]})))
        files = self.client.storage.list_files("/storage/sd/")
        self.assertEqual(files[0].name, "a.txt")
        self.assertEqual(self.sent().path_url, "/api/v1/files/sd/")

    def test_list_files_raw(self):
        self.reply(_response(body=_envelope([])))
        self.client.storage.list_files("/storage/sd/", raw=True)
        self.assertEqual(self.sent().path_url, "/api/v1/files/sd/?raw")

    def test_upload_file_multipart(self):
        with tempfile.NamedTemporaryFile(delete=False, suffix=".brs") as fh:
            fh.write(b"print \"hello\"")
        self.addCleanup(os.unlink, fh.name)

        self.client.storage.upload_file(fh.name, "/storage/sd/media/autorun.brs")

        prepared = self.sent()
        self.assertEqual(prepared.method, "PUT")
        self.assertEqual(prepared.path_url, "/api/v1/files/sd/media/")
        self.assertTrue(prepared.headers["Content-Type"].startswith("multipart/form-data; boundary="))
        self.assertIn(b'filename="autorun.brs"', prepared.body)
        self.assertIn(b'print "hello"', prepared.body)

    def test_download_file(self):
        self.reply(_response(body=b"\x00" * 100000))
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "video.mp4")
            written = self.client.storage.download_file("/storage/sd/video.mp4", target)
            self.assertEqual(written, 100000)
            self.assertEqual(os.path.getsize(target), 100000)
        self.assertEqual(self.sent().path_url, "/api/v1/files/sd/video.mp4?contents&stream")

    def test_download_error_writes_nothing(self):
        self.reply(_response(404, b"not found"))
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "missing.bin")
            with self.assertRaises(APIError):
                self.client.storage.download_file("/storage/sd/missing.bin", target)
            self.assertFalse(os.path.exists(target))

    def test_rename_file(self):
        self.client.storage.rename_file("/storage/sd/old.txt", "new.txt")
        prepared = self.sent()
        self.assertEqual(prepared.method, "POST")
        self.assertEqual(prepared.path_url, "/api/v1/files/sd/")
        self.assertEqual(json.loads(prepared.body), {"oldName": "old.txt", "newName": "new.txt"})

    def test_create_directory(self):
        self.client.storage.create_directory("/storage/sd/media/")
        prepared = self.sent()
        self.assertEqual(prepared.method, "PUT")
        self.assertEqual(prepared.path_url, "/api/v1/files/sd/")
        self.assertIn(b'name="directory"', prepared.body)
        self.assertIn(b"media", prepared.body)


if __name__ == "__main__":
    unittest.main()
