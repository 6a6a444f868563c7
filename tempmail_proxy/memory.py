# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
"""Process memory sampling used for admission control and emergency eviction."""

import os
import sys

MB = 1024 * 1024
STATM_PATH = '/proc/self/statm'


def read_process_memory():
    """Return raw byte counts ``(rss, data, vms, shared)`` for this process.

    ``/proc/self/statm`` is used where it exists. Elsewhere only the peak
    resident size from ``getrusage`` is available and the other figures are 0.
    """
    page_size = os.sysconf('SC_PAGE_SIZE') if hasattr(os, 'sysconf') else 4096
    try:
        with open(STATM_PATH) as fh:
            size, resident, shared, _text, _lib, data = (int(v) for v in fh.read().split()[:6])
        return resident * page_size, data * page_size, size * page_size, shared * page_size
    except (OSError, ValueError):
        import resource

        peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        # ru_maxrss is bytes on macOS, kilobytes on Linux
        rss = peak if sys.platform == 'darwin' else peak * 1024
        return rss, 0, 0, 0


class MemoryMonitor:
    def __init__(self, threshold_mb, reader=read_process_memory):
        self.threshold_mb = threshold_mb
        self._reader = reader

    def sample(self):
        rss, data, vms, shared = self._reader()
        return {
            'rss': round(rss / MB, 2),
            'heapUsed': round(data / MB, 2),
            'heapTotal': round(vms / MB, 2),
            'external': round(shared / MB, 2),
        }

    def is_high(self, sample=None):
        sample = sample or self.sample()
        return sample['rss'] > self.threshold_mb
