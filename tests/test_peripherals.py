"""Contact, address, identifier, network and media value objects."""

import time
import uuid as std_uuid

import pytest

from valor import (
    CEP,
    UF,
    UUID,
    Email,
    FileExtension,
    IPAddress,
    InvalidValueError,
    MIMEType,
    NullableUUID,
    Phone,
    PortNumber,
    Slug,
    dumps,
    loads,
    register_file_extensions,
    register_mime_types,
)


class TestEmail:

    def test_normalizes(self):
        assert Email("  Test@Example.COM ").value == "test@example.com"

    def test_display_name_form(self):
        email = Email("Ana Souza <Ana@Example.com>")
        assert email.value == "ana@example.com"
        assert email.local_part == "ana"
        assert email.domain == "example.com"

    @pytest.mark.parametrize("raw", ["", "   ", "plainaddress", "a@", "@b.com", "a..b@c.com"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidValueError):
            Email(raw)

    def test_too_long(self):
        with pytest.raises(InvalidValueError) as exc_info:
            Email("a" * 250 + "@x.com")
        assert exc_info.value.context["max_length"] == 254

    def test_json_and_db(self):
        email = Email("ana@example.com")
        assert loads(dumps(email), Email) == email
        assert Email.from_db(b"ana@example.com") == email
        assert Email.from_db(None) is None


class TestPhone:

    def test_mobile(self):
        phone = Phone("(11) 98765-4321")
        assert phone.value == "5511987654321"
        assert phone.country_code == "55"
        assert phone.area_code == "11"
        assert phone.number == "987654321"
        assert phone.is_mobile()
        assert not phone.is_landline()
        assert phone.formatted() == "+55 (11) 98765-4321"

    def test_landline(self):
        phone = Phone("+55 21 3456-7890")
        assert phone.is_landline()
        assert phone.formatted() == "+55 (21) 3456-7890"

    @pytest.mark.parametrize(
        "raw, expected, mobile",
        [
            ("(55) 99876-5432", "5555998765432", True),
            ("(55) 3222-1234", "555532221234", False),
            ("+55 55 3222-1234", "555532221234", False),
        ],
    )
    def test_area_code_matching_country_code(self, raw, expected, mobile):
        phone = Phone(raw)
        assert phone.value == expected
        assert phone.area_code == "55"
        assert phone.is_mobile() is mobile

    def test_foreign_country_code(self):
        with pytest.raises(InvalidValueError) as exc_info:
            Phone("+1 212 555 01234")
        assert exc_info.value.context["country_code"] == "12"

    def test_too_short(self):
        with pytest.raises(InvalidValueError):
            Phone("12345")

    def test_invalid_ddd(self):
        with pytest.raises(InvalidValueError) as exc_info:
            Phone("(20) 98765-4321")
        assert exc_info.value.context["area_code"] == "20"

    def test_mobile_must_start_with_nine(self):
        with pytest.raises(InvalidValueError):
            Phone("(11) 88765-4321")

    def test_landline_prefix(self):
        with pytest.raises(InvalidValueError):
            Phone("(11) 8765-4321")

    def test_db_round_trip(self):
        phone = Phone("11987654321")
        assert Phone.from_db(phone.to_db()) == phone


class TestCEP:

    def test_formats(self):
        cep = CEP("01310-100")
        assert cep.value == "01310100"
        assert cep.formatted() == "01310-100"

    def test_wrong_length(self):
        with pytest.raises(InvalidValueError):
            CEP("1234-567")


class TestUF:

    def test_parse(self):
        assert UF.parse(" sp ") is UF.SP
        assert len([uf for uf in UF if uf.is_valid()]) == 27

    def test_invalid(self):
        with pytest.raises(InvalidValueError):
            UF.parse("XX")
        with pytest.raises(InvalidValueError):
            UF.parse("")

    def test_null_is_empty(self):
        assert UF.from_db(None) is UF.EMPTY
        assert UF.from_json(None) is UF.EMPTY
        assert UF.EMPTY.to_json() is None

    def test_round_trip(self):
        assert UF.from_db(UF.RJ.to_db()) is UF.RJ
        assert UF.from_json(UF.RJ.to_json()) is UF.RJ


class TestUUID:

    def test_new_is_version_7(self):
        before = time.time_ns() // 1_000_000
        uid = UUID.new()
        after = time.time_ns() // 1_000_000
        assert uid.version == 7
        assert uid.value.variant == std_uuid.RFC_4122
        assert before <= uid.timestamp_ms <= after

    def test_new_ids_are_unique(self):
        assert len({UUID.new() for _ in range(1000)}) == 1000

    def test_parse(self):
        text = "0190f5a0-7b1c-7def-8abc-0123456789ab"
        assert str(UUID.parse(text)) == text

    def test_parse_invalid(self):
        with pytest.raises(InvalidValueError):
            UUID.parse("not-a-uuid")

    def test_nil(self):
        assert UUID.nil().is_nil()
        assert not UUID.new().is_nil()

    def test_db(self):
        uid = UUID.new()
        assert UUID.from_db(uid.to_db()) == uid
        assert UUID.from_db(uid.value.bytes) == uid
        assert UUID.from_db(None) is None
        with pytest.raises(InvalidValueError):
            UUID.from_db(12)


class TestNullableUUID:

    def test_accepted_inputs(self):
        text = "0190f5a0-7b1c-7def-8abc-0123456789ab"
        expected = NullableUUID(UUID.parse(text))
        assert NullableUUID(text) == expected
        assert NullableUUID(std_uuid.UUID(text)) == expected
        assert str(expected) == text

    def test_nil_is_empty(self):
        assert NullableUUID(UUID.nil()).is_zero()
        assert NullableUUID(std_uuid.UUID(int=0)) == NullableUUID()
        assert str(NullableUUID()) == ""

    def test_wrong_type(self):
        with pytest.raises(InvalidValueError) as exc_info:
            NullableUUID(42)
        assert exc_info.value.context["received_type"] == "int"

    def test_json(self):
        uid = NullableUUID(UUID.new())
        assert loads(dumps(uid), NullableUUID) == uid
        assert NullableUUID().to_json() is None
        assert NullableUUID.from_json(None) == NullableUUID()
        with pytest.raises(InvalidValueError):
            NullableUUID.from_json("not-a-uuid")

    def test_db(self):
        uid = NullableUUID(UUID.new())
        assert NullableUUID.from_db(uid.to_db()) == uid
        assert NullableUUID().to_db() is None
        assert NullableUUID.from_db(None).is_zero()


class TestSlug:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Hello, World!", "hello-world"),
            ("Café & Bar", "cafe-and-bar"),
            ("100% Natural", "100-percent-natural"),
            ("  São  Paulo  ", "sao-paulo"),
        ],
    )
    def test_normalization(self, raw, expected):
        assert Slug(raw).value == expected

    def test_empty_after_normalization(self):
        with pytest.raises(InvalidValueError):
            Slug("---")


class TestNetwork:

    def test_ip_addresses(self):
        assert IPAddress("192.168.0.1").is_ipv4()
        v6 = IPAddress(" 2001:DB8::1 ")
        assert v6.value == "2001:db8::1"
        assert v6.is_ipv6()

    def test_invalid_ip(self):
        with pytest.raises(InvalidValueError):
            IPAddress("256.1.1.1")

    def test_port(self):
        assert PortNumber(443).is_well_known()
        assert PortNumber.from_db(8080) == PortNumber(8080)
        assert PortNumber.from_json(22) == PortNumber(22)

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range(self, port):
        with pytest.raises(InvalidValueError):
            PortNumber(port)

    def test_port_from_db_string_is_invalid(self):
        with pytest.raises(InvalidValueError) as exc_info:
            PortNumber.from_db("80")
        assert exc_info.value.context["received_type"] == "str"


class TestMedia:

    def test_file_extension(self):
        register_file_extensions(".PDF", "png")
        ext = FileExtension(".pdf")
        assert ext.value == "pdf"
        assert ext.with_dot() == ".pdf"

    def test_unregistered_extension(self):
        with pytest.raises(InvalidValueError) as exc_info:
            FileExtension("exe")
        assert exc_info.value.context["extension"] == "exe"

    def test_malformed_extension_registration(self):
        with pytest.raises(InvalidValueError):
            register_file_extensions("tar.gz")

    def test_mime_type(self):
        register_mime_types("application/json", "Image/PNG")
        mime = MIMEType(" image/png ")
        assert mime.value == "image/png"
        assert mime.type == "image"
        assert mime.subtype == "png"

    def test_mime_format(self):
        register_mime_types("application/json")
        with pytest.raises(InvalidValueError):
            MIMEType("application")

    def test_unregistered_mime(self):
        with pytest.raises(InvalidValueError) as exc_info:
            MIMEType("text/html")
        assert exc_info.value.context["mime_type"] == "text/html"
