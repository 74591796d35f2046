"""
Tests for WWW-Authenticate Digest challenge parsing.
"""

import unittest

from bscli.auth.challenge import Challenge, parse_challenge, parse_digest_params
from bscli.exceptions import AuthChallengeInvalid, AuthSchemeUnsupported

HEADER = 'Digest realm="BrightSign", nonce="abc123", qop="auth", opaque="xyz789"'


class TestParseDigestParams(unittest.TestCase):
    def test_all_parameters(self):
        self.assertEqual(
            parse_digest_params(HEADER),
            {"realm": "BrightSign", "nonce": "abc123", "qop": "auth", "opaque": "xyz789"},
        )

    def test_unquoted_values(self):
        params = parse_digest_params('Digest realm="R", nonce="N", qop=auth, algorithm=MD5')
        self.assertEqual(params["qop"], "auth")
        self.assertEqual(params["algorithm"], "MD5")

    def test_extra_whitespace(self):
        params = parse_digest_params('Digest   realm = "R" ,nonce="N"  ')
        self.assertEqual(params, {"realm": "R", "nonce": "N"})

    def test_value_split_on_first_equals(self):
        params = parse_digest_params('Digest realm="R", nonce="bm9uY2U=="')
        self.assertEqual(params["nonce"], "bm9uY2U==")

    def test_parts_without_equals_ignored(self):
        params = parse_digest_params('Digest realm="R", stale, nonce="N"')
        self.assertEqual(params, {"realm": "R", "nonce": "N"})

    def test_quoted_comma_is_cut(self):
        # Known limitation of the comma split
        params = parse_digest_params('Digest realm="a,b", nonce="N"')
        self.assertEqual(params["realm"], "a")
        self.assertEqual(params["nonce"], "N")

    def test_qop_list_keeps_first_option(self):
        params = parse_digest_params('Digest realm="R", nonce="N", qop="auth,auth-int"')
        self.assertEqual(params["qop"], "auth")

    def test_basic_scheme_rejected(self):
        with self.assertRaises(AuthSchemeUnsupported):
            parse_digest_params('Basic realm="BrightSign"')

    def test_empty_header_rejected(self):
        with self.assertRaises(AuthSchemeUnsupported):
            parse_digest_params("")

    def test_unsupported_scheme_is_invalid_challenge(self):
        with self.assertRaises(AuthChallengeInvalid):
            parse_digest_params('Bearer realm="api"')

    def test_scheme_with_digest_prefix_rejected(self):
        with self.assertRaises(AuthSchemeUnsupported):
            parse_digest_params('Digestive realm="R", nonce="N"')

    def test_scheme_name_case_insensitive(self):
        self.assertEqual(
            parse_digest_params('digest realm="R", nonce="N"'),
            {"realm": "R", "nonce": "N"},
        )


class TestParseChallenge(unittest.TestCase):
    def test_challenge_fields(self):
        challenge = parse_challenge(HEADER)
        self.assertEqual(
            challenge,
            Challenge(realm="BrightSign", nonce="abc123", qop="auth", opaque="xyz789"),
        )

    def test_optional_fields_absent(self):
        challenge = parse_challenge('Digest realm="R", nonce="N"')
        self.assertIsNone(challenge.qop)
        self.assertIsNone(challenge.opaque)

    def test_missing_nonce(self):
        with self.assertRaises(AuthChallengeInvalid) as ctx:
            parse_challenge('Digest realm="R", qop="auth"')
        self.assertNotIsInstance(ctx.exception, AuthSchemeUnsupported)
        self.assertIn("nonce", str(ctx.exception))

    def test_empty_realm(self):
        with self.assertRaises(AuthChallengeInvalid):
            parse_challenge('Digest realm="", nonce="N"')


if __name__ == "__main__":
    unittest.main()
