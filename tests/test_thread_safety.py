"""Tests for thread safety of Injector."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from namewire.exceptions import NamewireCircularDependencyError
from namewire.injector import Injector
from namewire.registry import Registry


class SlowService:
    instances = 0
    lock = threading.Lock()

    def __init__(self) -> None:
        time.sleep(0.01)
        with SlowService.lock:
            SlowService.instances += 1


class TestConcurrentResolution:
    def test_concurrent_first_resolution_builds_once(self) -> None:
        """Contested first resolution invokes the factory exactly once."""
        calls: list[int] = []
        calls_lock = threading.Lock()

        def factory() -> object:
            time.sleep(0.01)
            with calls_lock:
                calls.append(1)
            return object()

        registry = Registry()
        registry.register("service", factory)
        injector = Injector(registry)

        results: list[object] = []
        errors: list[Exception] = []
        barrier = threading.Barrier(10)

        def resolve_service() -> None:
            try:
                barrier.wait()
                results.append(injector.resolve("service"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert len(calls) == 1

    def test_concurrent_dependency_chain(self) -> None:
        """Dependencies shared by concurrently resolved services are built once."""
        SlowService.instances = 0
        registry = Registry()
        registry.register("slow", SlowService)
        registry.register("a", lambda slow_: ("a", slow_))
        registry.register("b", lambda slow_: ("b", slow_))
        injector = Injector(registry)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(injector.resolve, ["a", "b"] * 8))

        assert SlowService.instances == 1
        assert len({id(slow) for _, slow in results}) == 1

    def test_cycle_detection_is_per_thread(self) -> None:
        """Each thread sees only its own in-progress resolutions."""
        registry = Registry()
        registry.register("A", lambda B_: B_)  # noqa: N803
        registry.register("B", lambda A_: A_)  # noqa: N803
        injector = Injector(registry)
        errors: list[Exception] = []

        def resolve_cycle() -> None:
            try:
                injector.resolve("A")
            except NamewireCircularDependencyError as e:
                errors.append(e)

        threads = [threading.Thread(target=resolve_cycle) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 4
        assert all(e.cycle == ("A", "B", "A") for e in errors)


class TestConcurrentRegistration:
    def test_concurrent_registration_no_corruption(self) -> None:
        """Concurrent registration doesn't corrupt the registry."""
        registry = Registry()
        errors: list[Exception] = []

        def register_service(i: int) -> None:
            try:
                registry.register(f"service{i}", lambda: i)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register_service, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(registry) == 10
