import pytest

SAMPLE_LINES = [
    "ip,timestamp,url,status,user_agent\n",
    "192.168.1.1,2024-02-01 10:15:23,/home,200,Mozilla/5.0\n",
    "192.168.1.2,2024-02-01 10:16:45,/products,404,Chrome/90.0\n",
    "192.168.1.3,2024-02-01 10:17:12,/checkout,500,Safari/14.0\n",
    "192.168.1.1,2024-02-01 10:18:30,/home,200,Mozilla/5.0\n",
    "192.168.1.4,2024-02-01 10:19:05,/products,404,Chrome/90.0\n",
]


@pytest.fixture
def sample_lines():
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "access_log.csv"
    path.write_text("".join(SAMPLE_LINES), encoding="utf-8")
    return path
