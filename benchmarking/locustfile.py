"""Locust load testing script for the text summarizer."""

import random

from locust import HttpUser, between, task

# Common search terms for random filtering
SAMPLE_QUERIES = [
    "climate",
    "revenue",
    "study",
    "python",
    "market",
    "policy",
]

SAMPLE_TEXT = (
    "The city council approved a new transit plan on Tuesday that adds 40 electric "
    "buses by 2027, extends night service on six routes, and funds a pilot for "
    "on-demand shuttles in the northern suburbs at a cost of 18 million dollars."
)


class SummarizerUser(HttpUser):
    """Simulated user browsing the summary history."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    @task(3)
    def fetch_recent_summaries(self) -> None:
        """Fetch the newest summaries - most common operation."""
        self.client.get("/api/summaries")

    @task(2)
    def search_summaries(self) -> None:
        """Search the history with a random query."""
        q = random.choice(SAMPLE_QUERIES)
        self.client.get(f"/api/summaries?q={q}", name="/api/summaries?q=[q]")

    @task(1)
    def page_through_summaries(self) -> None:
        """Fetch a later page of the history."""
        offset = random.choice([50, 100, 150])
        self.client.get(f"/api/summaries?offset={offset}", name="/api/summaries?offset=[n]")

    @task(1)
    def fetch_index_page(self) -> None:
        """Render the HTML page."""
        self.client.get("/")

    @task(1)
    def health_check(self) -> None:
        """Hit the health endpoint."""
        self.client.get("/api/health")


class SummarizingUser(HttpUser):
    """Simulated user submitting texts; expect 429s past the per-address quota."""

    wait_time = between(5, 10)
    weight = 1

    @task
    def summarize(self) -> None:
        """Submit a text for summarization."""
        style = random.choice(["concise", "detailed", "bullets"])
        with self.client.post(
            "/api/summarize",
            json={"text": SAMPLE_TEXT, "style": style},
            catch_response=True,
        ) as response:
            if response.status_code in (201, 429):
                response.success()
