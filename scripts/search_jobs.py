# scripts/search_jobs.py
from jobtech_search.main import run


def main():
    raise SystemExit(run())


if __name__ == "__main__":
    main()
