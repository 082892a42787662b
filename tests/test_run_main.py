"""
Tests for run.py main(): option precedence, exit codes and container injection.
"""
from unittest.mock import MagicMock

import pytest

from run import main, EXIT_CONFIG_ERROR, EXIT_OK, EXIT_ROOT_FAILED
from listcrawl.container import Container
from listcrawl.domain.crawl_result import CrawlResult
from listcrawl.exceptions import HttpFetchError


def make_container():
    container = Container()
    executor = MagicMock()
    executor.crawl.return_value = CrawlResult(1, 0, 0, False)
    container.crawl_executor.override(executor)
    return container, executor


def crawled_config(executor):
    (cfg,), _ = executor.crawl.call_args
    return cfg


def test_container_creates_services():
    container = Container()
    container.config.HTTP_TIMEOUT.from_value(3.0)
    container.config.USER_AGENT.from_value("TestBot/1.0")

    http_service = container.http_service()
    assert http_service.timeout == 3.0
    assert http_service.user_agent == "TestBot/1.0"
    assert container.page_fetcher() is not None
    assert container.crawl_executor() is not None


def test_container_downloader_factory_takes_simulate_flag():
    container = Container()
    executor = container.crawl_executor()
    downloader = executor.downloader_factory(simulate=True)
    assert downloader.simulate is True
    assert downloader.http_service is container.http_service()


def test_missing_root_is_a_config_error():
    container, executor = make_container()
    assert main([], container=container) == EXIT_CONFIG_ERROR
    assert not executor.crawl.called


def test_malformed_root_is_a_config_error():
    container, executor = make_container()
    assert main(["--root", "not a url"], container=container) == EXIT_CONFIG_ERROR
    assert not executor.crawl.called


def test_bad_filter_is_a_config_error():
    container, executor = make_container()
    assert main(["--root", "http://h/", "--filter", "[", "-s"], container=container) == EXIT_CONFIG_ERROR


def test_flags_build_crawler_config(tmp_path):
    container, executor = make_container()
    out = tmp_path / "out"
    code = main(
        ["--root", "http://h/pub/", "--filetype", ".iso", "--filter", "x86", "--output", str(out),
         "--max-depth", "4", "--workers", "2", "--timeout", "2.5"],
        container=container,
    )
    assert code == EXIT_OK
    cfg = crawled_config(executor)
    assert cfg.root_url == "http://h/pub/"
    assert cfg.origin == "http://h"
    assert cfg.file_type == ".iso"
    assert cfg.filter_pattern.pattern == "x86"
    assert cfg.output_dir == str(out)
    assert cfg.max_depth == 4
    assert cfg.workers == 2
    assert cfg.simulate is False
    assert container.config.HTTP_TIMEOUT() == 2.5
    assert out.is_dir()


def test_simulate_does_not_create_output_dir(tmp_path):
    container, executor = make_container()
    out = tmp_path / "never"
    assert main(["--root", "http://h/", "-s", "--output", str(out)], container=container) == EXIT_OK
    assert crawled_config(executor).simulate is True
    assert not out.exists()


def test_config_file_values_used_and_flags_override(tmp_path):
    cfg_file = tmp_path / "crawl.yml"
    cfg_file.write_text(
        "root: http://mirror/pub/\n"
        "filetype: .tar.gz\n"
        "filter: stable\n"
        "simulate: true\n"
    )
    container, executor = make_container()
    assert main(["--config", str(cfg_file), "--filetype", ".zip"], container=container) == EXIT_OK
    cfg = crawled_config(executor)
    assert cfg.root_url == "http://mirror/pub/"
    assert cfg.file_type == ".zip"
    assert cfg.filter_pattern.pattern == "stable"
    assert cfg.simulate is True


def test_environment_defaults_apply(tmp_path):
    container, executor = make_container()
    container.config.LISTCRAWL_FILETYPE.from_value(".rpm")
    container.config.LISTCRAWL_MAX_URLS.from_value(50)
    assert main(["--root", "http://h/", "-s"], container=container) == EXIT_OK
    cfg = crawled_config(executor)
    assert cfg.file_type == ".rpm"
    assert cfg.max_urls == 50


def test_invalid_config_file_is_a_config_error(tmp_path):
    cfg_file = tmp_path / "crawl.yml"
    cfg_file.write_text("root: http://h/\nbogus: 1\n")
    container, executor = make_container()
    assert main(["--config", str(cfg_file)], container=container) == EXIT_CONFIG_ERROR
    assert not executor.crawl.called


def test_root_fetch_failure_exits_non_zero():
    container, executor = make_container()
    executor.crawl.side_effect = HttpFetchError("http://h/", OSError("no route"))
    assert main(["--root", "http://h/", "-s"], container=container) == EXIT_ROOT_FAILED


@pytest.mark.parametrize("argv", [["--root", "http://h/", "-s"], ["--root", "http://h/", "--simulate"]])
def test_simulate_flag_spellings(argv):
    container, executor = make_container()
    main(argv, container=container)
    assert crawled_config(executor).simulate is True


@pytest.mark.parametrize("timeout", ["0", "-1"])
def test_non_positive_timeout_is_a_config_error(timeout):
    container, executor = make_container()
    assert main(["--root", "http://h/", "-s", "--timeout", timeout], container=container) == EXIT_CONFIG_ERROR
    assert not executor.crawl.called


def test_non_positive_timeout_in_config_file_is_a_config_error(tmp_path):
    cfg_file = tmp_path / "crawl.yml"
    cfg_file.write_text("root: http://h/\nsimulate: true\ntimeout: 0\n")
    container, executor = make_container()
    assert main(["--config", str(cfg_file)], container=container) == EXIT_CONFIG_ERROR
    assert not executor.crawl.called


def test_non_numeric_root_port_is_a_config_error():
    container, executor = make_container()
    assert main(["--root", "http://h:abc/", "-s"], container=container) == EXIT_CONFIG_ERROR
    assert not executor.crawl.called
