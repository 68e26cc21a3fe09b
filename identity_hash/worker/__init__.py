from .pool import HashWorkerPool
