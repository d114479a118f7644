import sys

from check_dnsbl.main import main


sys.exit(main())
