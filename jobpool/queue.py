"""
Channels between the job source, the workers and the result aggregator.

JobQueue is multi-producer/multi-consumer: any number of workers may block in
pull() and each job is handed to exactly one of them. ResultChannel is
multi-producer/single-consumer: workers send, the aggregator iterates.
Neither has a capacity bound, so producers never block.
"""

from collections import deque
import threading

from .domain import Job

CLOSED = object()


class QueueClosedError(Exception):
    pass


class Producer(object):
    def __init__(self, queue):
        self._queue = queue
        self._open = True

    # pylint: disable=protected-access
    def push(self, text):
        with self._queue._cond:
            if not self._open:
                raise QueueClosedError("push on a closed producer handle")
            return self._queue._put(text)

    def close(self):
        with self._queue._cond:
            if self._open:
                self._open = False
                self._queue._release()

    def __enter__(self):
        return self

    def __exit__(self, excType, excValue, traceback):
        self.close()


class JobQueue(object):
    def __init__(self):
        self._cond = threading.Condition()
        self._items = deque()
        self._producers = 0
        self._opened = False
        self._seq = 0

    def producer(self):
        with self._cond:
            if self.closed:
                raise QueueClosedError("queue already closed")
            self._producers += 1
            self._opened = True
        return Producer(self)

    @property
    def closed(self):
        # a queue no producer ever attached to is still waiting for one
        return self._opened and self._producers == 0

    def _put(self, text):
        with self._cond:
            job = Job(self._seq, text)
            self._seq += 1
            self._items.append(job)
            self._cond.notify()
        return job

    def _release(self):
        with self._cond:
            self._producers -= 1
            if self._producers == 0:
                self._cond.notify_all()

    def pull(self):
        """Block until a job is available, or return CLOSED once drained."""
        with self._cond:
            while not self._items:
                if self.closed:
                    return CLOSED
                self._cond.wait()
            return self._items.popleft()


class ResultChannel(object):
    def __init__(self, producers):
        if producers < 1:
            raise ValueError("ResultChannel needs at least one producer")
        self._cond = threading.Condition()
        self._items = deque()
        self._producers = producers

    def send(self, result):
        with self._cond:
            if self._producers == 0:
                raise QueueClosedError("send on a closed result channel")
            self._items.append(result)
            self._cond.notify()

    def producerDone(self):
        with self._cond:
            if self._producers == 0:
                raise QueueClosedError("no producers left to finish")
            self._producers -= 1
            if self._producers == 0:
                self._cond.notify_all()

    @property
    def closed(self):
        with self._cond:
            return self._producers == 0 and not self._items

    def recv(self):
        with self._cond:
            while not self._items:
                if self._producers == 0:
                    return CLOSED
                self._cond.wait()
            return self._items.popleft()

    def __iter__(self):
        while True:
            result = self.recv()
            if result is CLOSED:
                return
            yield result
