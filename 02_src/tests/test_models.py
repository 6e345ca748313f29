"""Tests for data models."""

import pytest

from span_recorder.models import (
    Endpoint,
    InetAddress,
    Kind,
    Span,
    TraceId,
    UnrecognizedAnnotation,
    annotation_from_dict,
    annotations,
)


class TestTraceId:
    """Tests for TraceId identity."""

    def test_equal_values_are_equal(self):
        """Test that distinct instances with the same ids are equal."""
        a = TraceId(trace_id="t1", span_id="s1", parent_span_id="p1")
        b = TraceId(trace_id="t1", span_id="s1", parent_span_id="p1")
        assert a is not b
        assert a == b
        assert hash(a) == hash(b)

    def test_usable_as_dict_key(self):
        """Test that an equal TraceId finds the same dict entry."""
        entries = {TraceId(trace_id="t1", span_id="s1"): "first"}
        assert entries[TraceId(trace_id="t1", span_id="s1")] == "first"

    def test_sampled_and_debug_do_not_affect_identity(self):
        """Test that sampling flags are not part of the identity."""
        a = TraceId(trace_id="t1", span_id="s1", sampled=True, debug=True)
        b = TraceId(trace_id="t1", span_id="s1", sampled=None)
        assert a == b
        assert hash(a) == hash(b)

    def test_shared_is_part_of_identity(self):
        """Test that the shared server half is a different span from the client half."""
        client = TraceId(trace_id="t1", span_id="s1")
        server = TraceId(trace_id="t1", span_id="s1", shared=True)
        assert client != server
        assert server.is_shared()
        assert not client.is_shared()

    def test_is_debug(self):
        """Test debug flag accessor."""
        assert TraceId(trace_id="t1", span_id="s1", debug=True).is_debug()


class TestInetAddress:
    """Tests for InetAddress."""

    def test_ipv4(self):
        """Test that an IPv4 address is returned as is."""
        assert InetAddress("192.168.1.10").ipv4() == "192.168.1.10"

    def test_ipv6_has_no_ipv4(self):
        """Test that IPv6 addresses have no IPv4 form."""
        assert InetAddress("::1").ipv4() is None

    def test_invalid_has_no_ipv4(self):
        """Test that garbage is not an address."""
        assert InetAddress("not-an-ip").ipv4() is None

    def test_local(self):
        """Test that the local address resolves to something."""
        assert InetAddress.local().addr


class TestEndpoint:
    """Tests for Endpoint."""

    def test_empty(self):
        """Test that a fresh endpoint is empty."""
        assert Endpoint().is_empty()

    def test_setters(self):
        """Test incremental construction."""
        endpoint = Endpoint()
        endpoint.set_service_name("frontend")
        endpoint.set_ipv4("10.0.0.1")
        endpoint.set_port(8080)
        assert endpoint == Endpoint(service_name="frontend", ipv4="10.0.0.1", port=8080)
        assert not endpoint.is_empty()


class TestSpan:
    """Tests for Span model."""

    def test_from_trace_id(self):
        """Test that a span copies ids from its TraceId."""
        span = Span.from_trace_id(
            TraceId(trace_id="t1", span_id="s1", parent_span_id="p1", debug=True)
        )
        assert span.trace_id == "t1"
        assert span.id == "s1"
        assert span.parent_id == "p1"
        assert span.debug is True
        assert span.kind is None
        assert span.annotations == []
        assert span.tags == {}

    def test_put_tag_stringifies(self):
        """Test that tag values are stored as strings."""
        span = Span(trace_id="t1", id="s1")
        span.put_tag("http.status_code", 200)
        span.put_tag("error", True)
        assert span.tags == {"http.status_code": "200", "error": "true"}

    def test_put_tag_last_write_wins(self):
        """Test that a repeated key keeps the last value."""
        span = Span(trace_id="t1", id="s1")
        span.put_tag("k", "a")
        span.put_tag("k", "b")
        assert span.tags == {"k": "b"}

    def test_annotations_keep_order(self):
        """Test that annotations are appended in order."""
        span = Span(trace_id="t1", id="s1")
        span.add_annotation(20, "second")
        span.add_annotation(10, "first")
        assert [a.value for a in span.annotations] == ["second", "first"]

    def test_duration_never_zero(self):
        """Test that a zero duration is rounded up to one microsecond."""
        span = Span(trace_id="t1", id="s1")
        span.set_duration(0)
        assert span.duration == 1

    def test_kind_values(self):
        """Test Kind enum values."""
        assert Kind.CLIENT.value == "CLIENT"
        assert Kind.CONSUMER == "CONSUMER"


class TestAnnotationFromDict:
    """Tests for annotation_from_dict()."""

    def test_simple_kind(self):
        """Test an annotation without fields."""
        annotation = annotation_from_dict({"annotationType": "ClientSend"})
        assert isinstance(annotation, annotations.ClientSend)
        assert annotation.annotation_type == "ClientSend"

    def test_camel_case_fields_and_host(self):
        """Test that camelCase keys map to fields and host becomes InetAddress."""
        annotation = annotation_from_dict(
            {
                "annotationType": "ServerAddr",
                "serviceName": "backend",
                "host": "10.0.0.2",
                "port": 9000,
            }
        )
        assert annotation == annotations.ServerAddr(
            service_name="backend", host=InetAddress("10.0.0.2"), port=9000
        )

    def test_unknown_kind(self):
        """Test that unknown kinds are kept as UnrecognizedAnnotation."""
        annotation = annotation_from_dict({"annotationType": "Sa", "port": 1})
        assert annotation == UnrecognizedAnnotation(annotation_type="Sa")

    def test_missing_type(self):
        """Test that annotationType is required."""
        with pytest.raises(ValueError):
            annotation_from_dict({"name": "x"})

    def test_missing_required_field(self):
        """Test that a kind missing its required field is rejected."""
        with pytest.raises(ValueError, match="Rpc"):
            annotation_from_dict({"annotationType": "Rpc"})

    def test_non_string_host_rejected(self):
        """Test that a host that is not an address string is rejected."""
        with pytest.raises(ValueError, match="host"):
            annotation_from_dict({"annotationType": "LocalAddr", "host": 5})

    def test_non_string_type_rejected(self):
        """Test that annotationType must be a string."""
        with pytest.raises(ValueError, match="annotationType"):
            annotation_from_dict({"annotationType": {"a": 1}})

    def test_extra_fields_ignored(self):
        """Test that fields a kind does not have are dropped."""
        annotation = annotation_from_dict({"annotationType": "Rpc", "name": "GET", "port": 1})
        assert annotation == annotations.Rpc(name="GET")
