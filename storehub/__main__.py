from storehub.command import console_main

console_main()
