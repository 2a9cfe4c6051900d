"""
Performance benchmarks for hashing representative documents.

Uses pytest-benchmark to measure throughput of the encoder.
"""

import pytest

pytest.importorskip(
    "pytest_benchmark", reason="pytest-benchmark plugin is required for benchmark tests"
)

from objecthash import EncodingOptions, digest


class TestPerformanceBenchmarks:
    """Throughput benchmarks for digest computation."""

    @pytest.fixture
    def document(self):
        return {
            "id": 1234567890,
            "name": "Ωmega document",
            "tags": [f"tag-{index}" for index in range(50)],
            "entries": [
                {"index": index, "label": f"entry {index}", "values": list(range(10))}
                for index in range(100)
            ],
        }

    def test_benchmark_flat_sequence(self, benchmark):
        values = list(range(1000))
        result = benchmark(digest, values)
        assert len(result) == 32

    def test_benchmark_nested_document(self, benchmark, document):
        result = benchmark(digest, document)
        assert result == digest(document)

    def test_benchmark_blake2b(self, benchmark, document):
        options = EncodingOptions(algorithm="blake2b")
        result = benchmark(lambda: digest(document, options=options))
        assert len(result) == 64
