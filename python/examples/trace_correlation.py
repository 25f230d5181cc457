import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

from logstash_obs import info, setup_logging

def main():
    trace.set_tracer_provider(TracerProvider())
    tracer = trace.get_tracer(__name__)
    setup_logging("DEBUG")
    with tracer.start_as_current_span("demo.span"):
        info("inside span", {"event": "demo"})  # carries trace_id/span_id
        logging.getLogger("demo").warning("stdlib record in span")
    info("outside span")

if __name__ == "__main__":
    main()
