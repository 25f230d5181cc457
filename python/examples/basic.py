import os
import logstash_obs as log

def main():
    os.environ.setdefault("APP_NAME", "py-basic")
    log.info("service started")
    log.info("order accepted", {"symbol": "AAPL", "qty": 10})
    try:
        {}["missing"]
    except KeyError as exc:
        log.error("lookup failed", exc)
    log.warn(ValueError("bad threshold"))
    log.verbose()
    log.shutdown()

if __name__ == "__main__":
    main()
