from __future__ import annotations

import pytest

from fixedcol.columns import Backend, ColumnBinder, ColumnDecoder, ColumnEncoding, encoding_for
from fixedcol.columns.binder import bind
from fixedcol.columns.policy import BINARY, TEXT, classify_column_type, normalize_column_type, policy_table
from fixedcol.domain.fixed_bytes import Address, FixedBytes
from fixedcol.errors import (
    InvalidHexDigit,
    InvalidHexLength,
    LengthMismatch,
    UnexpectedNull,
    UnsupportedColumnType,
)

SAMPLE_HEX = "0x742d35cc6635c0532925a3b8d42cc72b5c2a9a1d"
SAMPLE = Address.from_hex(SAMPLE_HEX)


class TestPolicy:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("varchar(42)", "VARCHAR"),
            ("  BINARY( 20 ) ", "BINARY"),
            ("character  varying (42)", "CHARACTER VARYING"),
            ("bytea", "BYTEA"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_column_type(raw) == expected

    @pytest.mark.parametrize(
        "backend, column_type, expected",
        [
            (Backend.SQLITE, "TEXT", ColumnEncoding.TEXT_HEX),
            (Backend.SQLITE, "BINARY(20)", ColumnEncoding.TEXT_HEX),
            (Backend.SQLITE, "BLOB", ColumnEncoding.TEXT_HEX),
            (Backend.MYSQL, "BINARY(20)", ColumnEncoding.NATIVE_BINARY),
            (Backend.MYSQL, "varbinary(20)", ColumnEncoding.NATIVE_BINARY),
            (Backend.MYSQL, "VARCHAR(42)", ColumnEncoding.TEXT_HEX),
            (Backend.POSTGRES, "BYTEA", ColumnEncoding.NATIVE_BINARY),
            (Backend.POSTGRES, "VARCHAR(42)", ColumnEncoding.TEXT_HEX),
            (Backend.POSTGRES, "character varying(42)", ColumnEncoding.TEXT_HEX),
            (Backend.POSTGRES, "text", ColumnEncoding.TEXT_HEX),
        ],
    )
    def test_encoding_table(self, backend, column_type, expected):
        assert encoding_for(backend, column_type) is expected

    def test_defaults_without_column_type(self):
        assert encoding_for("sqlite") is ColumnEncoding.TEXT_HEX
        assert encoding_for("mysql") is ColumnEncoding.NATIVE_BINARY

    def test_postgres_requires_declared_type(self):
        with pytest.raises(UnsupportedColumnType):
            encoding_for(Backend.POSTGRES)

    @pytest.mark.parametrize(
        "backend, column_type",
        [
            (Backend.POSTGRES, "BINARY(20)"),
            (Backend.POSTGRES, "INTEGER"),
            (Backend.MYSQL, "BYTEA"),
            (Backend.SQLITE, "INTEGER"),
            (Backend.MYSQL, ""),
        ],
    )
    def test_unknown_types_rejected(self, backend, column_type):
        with pytest.raises(UnsupportedColumnType) as exc_info:
            classify_column_type(backend, column_type)
        assert exc_info.value.backend is backend

    def test_classify(self):
        assert classify_column_type("postgres", "BYTEA") == BINARY
        assert classify_column_type("mysql", "CHAR(42)") == TEXT

    def test_backend_aliases(self):
        assert Backend.parse("PostgreSQL") is Backend.POSTGRES
        assert Backend.parse("mariadb") is Backend.MYSQL
        with pytest.raises(ValueError):
            Backend.parse("oracle")

    def test_policy_table_covers_every_backend(self):
        backends = {row[0] for row in policy_table()}
        assert backends == set(Backend)


class TestColumnBinder:
    binder = ColumnBinder()

    def test_sqlite_binds_text(self):
        assert self.binder.bind(Backend.SQLITE, SAMPLE) == SAMPLE_HEX
        assert self.binder.bind(Backend.SQLITE, SAMPLE, "BINARY(20)") == SAMPLE_HEX

    def test_mysql_binds_raw_bytes(self):
        assert self.binder.bind(Backend.MYSQL, SAMPLE) == bytes(SAMPLE)
        assert self.binder.bind("mysql", SAMPLE, "BINARY(20)") == bytes(SAMPLE)

    def test_postgres_follows_declared_type(self):
        assert self.binder.bind(Backend.POSTGRES, SAMPLE, "BYTEA") == bytes(SAMPLE)
        assert self.binder.bind(Backend.POSTGRES, SAMPLE, "VARCHAR(42)") == SAMPLE_HEX

    def test_postgres_without_type_fails(self):
        with pytest.raises(UnsupportedColumnType):
            self.binder.bind(Backend.POSTGRES, SAMPLE)

    def test_bind_is_idempotent(self):
        first = self.binder.bind(Backend.MYSQL, SAMPLE)
        assert self.binder.bind(Backend.MYSQL, SAMPLE) == first

    def test_bind_many(self):
        values = [Address.zero(), SAMPLE]
        assert self.binder.bind_many("postgres", values, "BYTEA") == [bytes(20), bytes(SAMPLE)]

    def test_bind_rejects_raw_values(self):
        with pytest.raises(TypeError):
            self.binder.bind(Backend.MYSQL, bytes(SAMPLE))

    def test_other_widths(self):
        hash32 = FixedBytes[32].from_hex("0x" + "ab" * 32)
        assert bind("sqlite", hash32) == "0x" + "ab" * 32
        assert bind("postgres", hash32, "BYTEA") == b"\xab" * 32


class TestColumnDecoder:
    decoder = ColumnDecoder(Address)

    @pytest.mark.parametrize(
        "backend, column_type",
        [
            (Backend.SQLITE, "TEXT"),
            (Backend.SQLITE, "BINARY(20)"),
            (Backend.MYSQL, "BINARY(20)"),
            (Backend.MYSQL, "VARCHAR(42)"),
            (Backend.POSTGRES, "BYTEA"),
            (Backend.POSTGRES, "VARCHAR(42)"),
        ],
    )
    def test_inverse_of_binder(self, backend, column_type):
        bound = ColumnBinder().bind(backend, SAMPLE, column_type)
        assert self.decoder.decode(backend, column_type, bound) == SAMPLE

    def test_text_may_come_back_recased(self):
        upper = "0x" + SAMPLE_HEX[2:].upper()
        assert self.decoder.decode(Backend.SQLITE, "TEXT", upper) == SAMPLE

    def test_binary_may_come_back_as_memoryview(self):
        raw = memoryview(bytes(SAMPLE))
        assert self.decoder.decode(Backend.POSTGRES, "BYTEA", raw) == SAMPLE

    def test_cross_backend_identity(self):
        via_sqlite = self.decoder.decode(Backend.SQLITE, "TEXT", ColumnBinder().bind(Backend.SQLITE, SAMPLE))
        via_mysql = self.decoder.decode(Backend.MYSQL, "BINARY(20)", ColumnBinder().bind(Backend.MYSQL, SAMPLE))
        assert via_sqlite == via_mysql
        assert bytes(via_sqlite) == bytes(via_mysql)

    def test_unsupported_column_type(self):
        with pytest.raises(UnsupportedColumnType):
            self.decoder.decode(Backend.POSTGRES, "INTEGER", b"\x00" * 20)

    @pytest.mark.parametrize("backend", [Backend.SQLITE, Backend.MYSQL, Backend.POSTGRES])
    def test_missing_column_type_is_unsupported(self, backend):
        with pytest.raises(UnsupportedColumnType) as exc_info:
            self.decoder.decode(backend, None, bytes(20))
        assert exc_info.value.column_type is None
        assert exc_info.value.backend == backend

    def test_codec_errors_propagate(self):
        with pytest.raises(LengthMismatch):
            self.decoder.decode(Backend.MYSQL, "BINARY(20)", b"\x00" * 19)
        with pytest.raises(InvalidHexLength):
            self.decoder.decode(Backend.SQLITE, "TEXT", "0x1234")
        with pytest.raises(InvalidHexDigit):
            self.decoder.decode(Backend.POSTGRES, "VARCHAR(42)", "0x" + "q" * 40)

    def test_null_is_an_error(self):
        with pytest.raises(UnexpectedNull) as exc_info:
            self.decoder.decode(Backend.POSTGRES, "BYTEA", None, column="hash")
        assert exc_info.value.column == "hash"

    def test_decode_optional_maps_null_to_none(self):
        assert self.decoder.decode_optional(Backend.POSTGRES, "BYTEA", None) is None
        assert self.decoder.decode_optional(Backend.POSTGRES, "BYTEA", bytes(SAMPLE)) == SAMPLE

    def test_decode_optional_still_checks_column_type(self):
        with pytest.raises(UnsupportedColumnType):
            self.decoder.decode_optional(Backend.POSTGRES, "JSONB", None)

    def test_mixed_encoding_is_not_silently_fixed(self):
        # hex text read back from a column declared binary
        with pytest.raises(TypeError):
            self.decoder.decode(Backend.MYSQL, "BINARY(20)", SAMPLE_HEX)
