import sys

from attendance_bot.main import main

sys.exit(main())
