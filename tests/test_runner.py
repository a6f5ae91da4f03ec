"""
End-to-end runs of the CLI pipeline against a stubbed chat-completion session.

Nothing here touches the network; the client is built with FakeSession and a
recording sleep so retries and pacing cost no wall-clock time.
"""
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

import main
from services.llm.openrouter_client import OpenRouterClient
from stubs import TEST_CONFIG, VALID_REPLY, FakeSession, SleepRecorder, chat_response


def stub_client(outcomes):
    return OpenRouterClient(TEST_CONFIG, session=FakeSession(outcomes), sleep=SleepRecorder())


class RunnerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        patcher = mock.patch.object(main, "init_logging")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _input(self, claims) -> Path:
        path = self.tmp / "claims.json"
        path.write_text(json.dumps(claims), encoding="utf-8")
        return path

    def test_single_claim_scenario(self) -> None:
        input_path = self._input([{"id": "C1", "denial_note": "CPT code invalid"}])
        output_path = self.tmp / "out" / "result.json"

        code = main.main([str(input_path), str(output_path)], client=stub_client([chat_response(VALID_REPLY)]))

        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(output_path.read_text(encoding="utf-8")),
            [
                {
                    "id": "C1",
                    "denial_note": "CPT code invalid",
                    "categories": ["Coding Error"],
                    "extracted_fields": {"payer": None, "cpt_codes": [], "suggested_action": "Resubmit"},
                }
            ],
        )

    def test_partial_failures_still_exit_zero(self) -> None:
        input_path = self._input([
            {"id": "C1", "denial_note": "CPT code invalid"},
            {"id": "C2", "denial_note": "Eligibility terminated"},
        ])
        output_path = self.tmp / "result.json"
        client = stub_client([chat_response(VALID_REPLY)] + [requests.ConnectionError("refused")] * 3)

        pacing = SleepRecorder()
        outputs = main.run_pipeline(input_path, output_path, client, delay=0.5, sleep=pacing)
        self.assertEqual(pacing.calls, [0.5])

        written = json.loads(output_path.read_text(encoding="utf-8"))
        self.assertEqual([o["id"] for o in written], ["C1", "C2"])
        self.assertNotIn("error", written[0])
        self.assertEqual(written[1]["categories"], [])
        self.assertEqual(written[1]["extracted_fields"], {})
        self.assertIn("(id: C2)", written[1]["error"])
        self.assertIn("refused", written[1]["error"])
        self.assertEqual(len(outputs), 2)

    def test_invalid_input_aborts_before_any_call(self) -> None:
        input_path = self._input([{"id": "C1", "denial_note": "   "}])
        output_path = self.tmp / "result.json"
        session = FakeSession([])
        client = OpenRouterClient(TEST_CONFIG, session=session, sleep=SleepRecorder())

        code = main.main([str(input_path), str(output_path)], client=client)

        self.assertEqual(code, 1)
        self.assertEqual(session.calls, [])
        self.assertFalse(output_path.exists())

    def test_bad_path_argument(self) -> None:
        code = main.main([str(self.tmp / "claims"), str(self.tmp / "out.json")], client=stub_client([]))
        self.assertEqual(code, 1)

    def test_missing_credential(self) -> None:
        input_path = self._input([{"id": "C1", "denial_note": "x"}])
        with mock.patch.object(main, "load_dotenv"), mock.patch.dict("os.environ", {}, clear=True):
            code = main.main([str(input_path), str(self.tmp / "out.json")])
        self.assertEqual(code, 1)

    def test_wrong_argument_count(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            main.main(["only-one.json"], client=stub_client([]))
        self.assertNotEqual(ctx.exception.code, 0)

    def test_interrupt_writes_nothing(self) -> None:
        input_path = self._input([{"id": "C1", "denial_note": "x"}])
        output_path = self.tmp / "result.json"
        client = stub_client([KeyboardInterrupt()])

        code = main.main([str(input_path), str(output_path)], client=client)

        self.assertEqual(code, 130)
        self.assertFalse(output_path.exists())


if __name__ == "__main__":
    unittest.main()
