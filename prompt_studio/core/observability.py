import logging

import phoenix as px
from openinference.instrumentation.llama_index import LlamaIndexInstrumentor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk import trace as trace_sdk
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from prompt_studio.core.config import settings

logger = logging.getLogger(__name__)


def init_observability():
    """
    Launches a local Arize Phoenix instance and routes LlamaIndex traces to it.
    Every analyze/plan/patch exchange with the generator shows up as a trace.
    """
    try:
        px.launch_app()

        tracer_provider = trace_sdk.TracerProvider()
        tracer_provider.add_span_processor(
            SimpleSpanProcessor(OTLPSpanExporter(settings.OBSERVABILITY_ENDPOINT))
        )

        LlamaIndexInstrumentor().instrument(tracer_provider=tracer_provider)

        logger.info("Phoenix observability initialized, exporting to %s", settings.OBSERVABILITY_ENDPOINT)

    except Exception as e:
        logger.warning(f"Failed to initialize Arize Phoenix: {e}")
