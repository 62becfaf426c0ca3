#!/usr/bin/env python3
from gptc.cli import main

if __name__ == "__main__":
    main()
