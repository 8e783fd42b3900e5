from newsletter.startup import main

main()
